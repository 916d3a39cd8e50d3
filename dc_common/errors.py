"""Shared error taxonomy for dashboard-composer."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class DCError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class CompositionError(DCError):
    """Structural failure while composing a page; aborts the whole call."""


class EmptyPathError(CompositionError):
    """A tabgroup specification parsed to zero segments."""


class InvalidPathShapeError(CompositionError):
    """A tabgroup specification had an unsupported shape."""


class InvalidItemError(DCError):
    """A visualization item was authored with invalid fields."""


class ConfigurationError(DCError):
    """Failure due to invalid settings or collection files."""


class AmbiguousFilterMatchWarning(UserWarning):
    """A nested item's filter matched no parent tab and was left out."""

    def __init__(self, message: str, *, path: tuple[str, ...], signature: str, insertion_index: int) -> None:
        super().__init__(message)
        self.path = path
        self.signature = signature
        self.insertion_index = insertion_index

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "message": str(self),
            "path": list(self.path),
            "signature": self.signature,
            "insertion_index": self.insertion_index,
        }


T = TypeVar("T", bound=DCError)


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Create a typed DCError with optional context and cause."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: DCError) -> dict[str, Any]:
    """Convert a DCError to a reporting payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
