"""
Pydantic schemas for ledger transactions.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from meal_card.models.enums import TransactionType, TransactionDirection
from meal_card.schemas.card import CardResponse


class TransactionResponse(BaseModel):
    id: int
    card_id: int
    transaction_type: TransactionType
    direction: TransactionDirection
    amount: Decimal
    actor_id: int | None
    actor_name: str | None
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class DashboardResponse(BaseModel):
    """A student's card and their history, newest first."""
    card: CardResponse
    transactions: list[TransactionResponse]
