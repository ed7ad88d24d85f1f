"""Error hierarchy for notemark.

The compiler itself never raises for malformed markdown -- every input
degrades to a best-effort structure and non-fatal issues are reported as
:class:`~notemark.models.ConversionWarning`.  Errors are reserved for
programmer mistakes such as an invalid :class:`~notemark.config.CompilerConfig`.

Every error carries a machine-readable ``code`` (from :class:`ErrorCode`),
a human-readable ``message``, an optional structured ``context`` dict, and
an optional ``cause`` (chained exception).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    CONFIG_ERROR = "CONFIG_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotemarkError(Exception):
    """Base exception for all notemark errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class NotemarkConfigError(NotemarkError, ValueError):
    """A :class:`~notemark.config.CompilerConfig` value is out of range.

    Also a :class:`ValueError` so plain ``except ValueError`` callers keep
    working.

    Context keys: ``field``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
