"""
Domain errors.

Every error a caller can expect from the services is a
MealCardError carrying a stable ErrorCode. None of them is
fatal: services validate before they mutate, so the store is
left unchanged when one is raised.
"""

import enum


class ErrorCode(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_STATE = "INVALID_STATE"
    ALREADY_PROCESSED = "ALREADY_PROCESSED"
    CARD_BLOCKED = "CARD_BLOCKED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    DUPLICATE_CARD = "DUPLICATE_CARD"


class MealCardError(ValueError):
    """Base class for expected, recoverable domain errors."""

    code: ErrorCode = ErrorCode.INVALID_STATE


class NotFound(MealCardError):
    code = ErrorCode.NOT_FOUND


class InvalidAmount(MealCardError):
    code = ErrorCode.INVALID_AMOUNT


class InvalidState(MealCardError):
    """Raised for a balance that would go negative or a bad status change."""
    code = ErrorCode.INVALID_STATE


class AlreadyProcessed(MealCardError):
    """Raised when a recharge request has already left PENDING."""
    code = ErrorCode.ALREADY_PROCESSED


class CardBlocked(MealCardError):
    code = ErrorCode.CARD_BLOCKED


class InsufficientFunds(MealCardError):
    code = ErrorCode.INSUFFICIENT_FUNDS


class DuplicateCard(MealCardError):
    code = ErrorCode.DUPLICATE_CARD
