"""
Meal card model.

A meal card is the stored-value account of one student.
Its balance is stored directly and is only ever changed by
LedgerService.post(), which writes the matching transaction
in the same unit of work.

The card has a small state machine: a card can be blocked
and unblocked, nothing else.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Numeric, ForeignKey, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meal_card.models.base import Base
from meal_card.models.enums import CardStatus


VALID_TRANSITIONS: dict[CardStatus, set[CardStatus]] = {
    CardStatus.ACTIVE: {CardStatus.BLOCKED},
    CardStatus.BLOCKED: {CardStatus.ACTIVE},
}


class MealCard(Base):
    __tablename__ = "meal_cards"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_meal_cards_balance_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), unique=True, nullable=False, index=True
    )
    card_number: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False, index=True
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    status: Mapped[CardStatus] = mapped_column(
        SAEnum(CardStatus, name="card_status_enum", create_constraint=True),
        nullable=False,
        default=CardStatus.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )

    owner: Mapped["User"] = relationship(back_populates="card")

    def can_transition_to(self, new_status: CardStatus) -> bool:
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    def __repr__(self) -> str:
        return f"<MealCard {self.card_number} {self.balance} ({self.status.value})>"
