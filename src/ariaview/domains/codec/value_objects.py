"""Value Objects for the Codec Context.

A codec never raises to report that input does not fit its domain.
It returns a ``CodecResult`` which is either ``ok`` with a value or
``invalid`` with a ``FormatError``. Anything a codec *raises* is treated
as a genuine failure and propagates to the caller untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

MIXED = "mixed"


@dataclass(frozen=True)
class FormatError:
    """Raw or typed input that does not fit a codec's domain.

    Attributes:
        message: Human-readable description of the mismatch.
        value: The offending raw string or typed value.
    """

    message: str
    value: Any = None

    def __str__(self) -> str:
        return self.message


class AttributeFormatError(ValueError):
    """Exception form of a FormatError.

    Raised by ``CodecResult.unwrap()`` and accepted from user-supplied
    codec functions, where it is translated back into a result.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(message)

    @classmethod
    def from_error(cls, error: FormatError) -> "AttributeFormatError":
        return cls(error.message, error.value)


@dataclass(frozen=True)
class CodecResult(Generic[T]):
    """Outcome of a decode or encode call.

    Examples:
        >>> CodecResult.ok(True).value
        True
        >>> CodecResult.invalid("bad").is_format_error
        True
    """

    value: Optional[T] = None
    error: Optional[FormatError] = None

    @classmethod
    def ok(cls, value: Any) -> "CodecResult[Any]":
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def invalid(cls, message: str, value: Any = None) -> "CodecResult[Any]":
        """Create a format-error result."""
        return cls(error=FormatError(message, value))

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_format_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> Any:
        """Return the value, raising AttributeFormatError on a format error."""
        if self.error is not None:
            raise AttributeFormatError.from_error(self.error)
        return self.value

    def unwrap_or(self, default: Any) -> Any:
        """Return the value, or ``default`` on a format error."""
        if self.error is not None:
            return default
        return self.value

    def __bool__(self) -> bool:
        return self.is_ok

    def __repr__(self) -> str:
        if self.error is not None:
            return f"CodecResult.invalid({self.error.message!r})"
        return f"CodecResult.ok({self.value!r})"
