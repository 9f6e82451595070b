"""
Result type returned by the racha services.

Expected outcomes (not enough confirmed players, a finished game, a rejected
sign-up) come back as failed results with an error code instead of
exceptions. A failure may carry a payload: the DrawShortfall of a draw that
could not run, or the DrawResult whose save failed so it can be persisted
again without redrawing.

    result = draw_service.draw_teams(game_id)
    if result.success:
        show(result.value)
    elif result.error_code == error_codes.PERSISTENCE_FAILURE:
        draw_service.persist_draw(game_id, result.value)
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service call.

    Attributes:
        success: Whether the operation succeeded
        value: The value on success; on failure an optional payload
        error: Message shown to the organizer (None on success)
        error_code: One of services.error_codes (None on success)
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None, value: Any = None) -> "Result[T]":
        return cls(success=False, value=value, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """
        Get the value, raising ValueError if the result is a failure.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        """Get the value, or default when the result is a failure (payload ignored)."""
        return self.value if self.success else default  # type: ignore
