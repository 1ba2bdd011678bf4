"""
Pydantic schemas for recharge requests.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from meal_card.models.enums import RechargeStatus


class RechargeRequestResponse(BaseModel):
    id: int
    card_id: int
    amount: Decimal
    status: RechargeStatus
    requested_by: int
    requested_at: datetime
    reviewed_by: int | None
    reviewed_at: datetime | None
    notes: str | None

    model_config = {"from_attributes": True}


class PendingRechargeResponse(RechargeRequestResponse):
    """A pending request with the fields a manager needs to decide."""
    student_name: str
    card_number: str
