"""
Result envelopes returned by MealCardApi.

Failures come back as data, never as exceptions: a result
either carries its payload or an OperationError.
"""

from decimal import Decimal

from pydantic import BaseModel

from meal_card.exceptions import ErrorCode, MealCardError
from meal_card.schemas.card import CardResponse
from meal_card.schemas.recharge import RechargeRequestResponse


class OperationError(BaseModel):
    code: ErrorCode
    message: str

    @classmethod
    def from_exception(cls, exc: MealCardError) -> "OperationError":
        return cls(code=exc.code, message=str(exc))


class OperationResult(BaseModel):
    error: OperationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChargeResult(OperationResult):
    new_balance: Decimal | None = None


class RechargeSubmitResult(OperationResult):
    request: RechargeRequestResponse | None = None


class ReviewResult(OperationResult):
    """Outcome of approving or rejecting a recharge request."""
    request: RechargeRequestResponse | None = None


class CardResult(OperationResult):
    card: CardResponse | None = None
