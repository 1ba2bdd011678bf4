"""
Recharge request model.

A request starts PENDING and is moved to APPROVED or
REJECTED exactly once by RechargeService. Terminal states
have no transitions out.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Numeric, ForeignKey, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meal_card.models.base import Base
from meal_card.models.enums import RechargeStatus


class RechargeRequest(Base):
    __tablename__ = "recharge_requests"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_recharge_requests_amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    card_id: Mapped[int] = mapped_column(
        ForeignKey("meal_cards.id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[RechargeStatus] = mapped_column(
        SAEnum(
            RechargeStatus,
            name="recharge_status_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=RechargeStatus.PENDING,
        index=True,
    )
    requested_by: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False
    )
    requested_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )
    reviewed_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    card: Mapped["MealCard"] = relationship()
    requester: Mapped["User"] = relationship(foreign_keys=[requested_by])

    @property
    def is_pending(self) -> bool:
        return self.status == RechargeStatus.PENDING

    def __repr__(self) -> str:
        return f"<RechargeRequest {self.id} {self.amount} ({self.status.value})>"
