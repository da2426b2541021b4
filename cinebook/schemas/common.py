import math
from typing import Optional, Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


def whole_currency(v) -> Optional[int]:
    """VND has no minor unit: "150000.00" and 150000.0 both mean 150000."""
    if v is None or v == "":
        return None
    # pydantic only turns ValueError into a validation error
    try:
        amount = float(v)
    except (TypeError, OverflowError) as exc:
        raise ValueError(f"price must be a number, got {v!r}") from exc
    if not math.isfinite(amount):
        raise ValueError(f"price must be a finite number, got {v!r}")
    return int(amount)


# Envelope the remote cinema API wraps every payload in
class ApiEnvelope(BaseModel, Generic[T]):
    code: int
    message: Optional[str] = None
    result: Optional[T] = None


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str


class FetchFailureResponse(ErrorResponse):
    retryable: bool = True
