"""
Pydantic schemas for meal cards and provisioning.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from meal_card.models.enums import CardStatus
from meal_card.schemas.user import StudentResponse


class StudentProvision(BaseModel):
    """Request to register a student and issue their card."""
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    card_number: str = Field(min_length=1, max_length=32)
    enrollment_no: str = Field(min_length=1, max_length=50)
    department: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=1, le=6)
    opening_balance: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)


class CardResponse(BaseModel):
    id: int
    owner_id: int
    card_number: str
    balance: Decimal
    status: CardStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class CardLookupResponse(BaseModel):
    """What a cashier sees after scanning a card."""
    card: CardResponse
    owner: StudentResponse
