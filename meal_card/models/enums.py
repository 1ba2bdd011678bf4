"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class Role(str, enum.Enum):
    """What a user is allowed to do in the application."""
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    CASHIER = "CASHIER"
    STUDENT = "STUDENT"


class CardStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"


class TransactionType(str, enum.Enum):
    """Business reason for a balance change."""
    RECHARGE = "RECHARGE"
    PURCHASE = "PURCHASE"
    REFUND = "REFUND"
    ADJUSTMENT = "ADJUSTMENT"


class TransactionDirection(str, enum.Enum):
    """Direction of a balance change, from the card holder's side."""
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class RechargeStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
