"""
Database models package.

All models are imported here so that Base.metadata knows
every table before the store creates the schema.
"""

from meal_card.models.base import Base
from meal_card.models.enums import (
    Role,
    CardStatus,
    TransactionType,
    TransactionDirection,
    RechargeStatus,
)
from meal_card.models.user import User, StudentProfile
from meal_card.models.card import MealCard
from meal_card.models.transaction import Transaction
from meal_card.models.recharge_request import RechargeRequest
from meal_card.models.menu_item import MenuItem

__all__ = [
    "Base",
    "Role",
    "CardStatus",
    "TransactionType",
    "TransactionDirection",
    "RechargeStatus",
    "User",
    "StudentProfile",
    "MealCard",
    "Transaction",
    "RechargeRequest",
    "MenuItem",
]
