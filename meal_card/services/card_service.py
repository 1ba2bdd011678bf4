"""
Card service — students, their cards and card status.

Provisioning creates the user, the student profile and the
card together. An opening balance is posted through the
ledger like any other credit, so no balance exists without a
transaction behind it.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from meal_card.exceptions import DuplicateCard, InvalidState, NotFound
from meal_card.models.card import MealCard
from meal_card.models.enums import (
    CardStatus,
    Role,
    TransactionDirection,
    TransactionType,
)
from meal_card.models.transaction import Transaction
from meal_card.models.user import User, StudentProfile
from meal_card.schemas.card import StudentProvision
from meal_card.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


class CardService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger_service = LedgerService(db)

    def create_user(self, name: str, email: str, role: Role) -> User:
        """Create a staff or student user without a card."""
        email = email.strip().lower()
        existing = self.db.execute(
            select(User).where(func.lower(User.email) == email)
        ).scalar_one_or_none()
        if existing:
            raise InvalidState(f"User with email '{email}' already exists")

        user = User(name=name, email=email, role=role)
        self.db.add(user)
        self.db.flush()
        return user

    def provision_student(
        self, request: StudentProvision, actor_id: int | None = None
    ) -> MealCard:
        """
        Register a student and issue their card.

        The card starts ACTIVE. Card numbers are stored upper-case
        and must be unique; so must the email and enrollment number.
        """
        card_number = request.card_number.strip().upper()
        email = request.email.strip().lower()

        if self.ledger_service.get_account(card_number) is not None:
            raise DuplicateCard(f"Card number '{card_number}' already exists")

        existing = self.db.execute(
            select(StudentProfile).where(
                StudentProfile.enrollment_no == request.enrollment_no
            )
        ).scalar_one_or_none()
        if existing:
            raise InvalidState(
                f"Enrollment number '{request.enrollment_no}' already exists"
            )

        user = self.create_user(request.name, email, Role.STUDENT)

        self.db.add(StudentProfile(
            user_id=user.id,
            enrollment_no=request.enrollment_no,
            department=request.department,
            year=request.year,
        ))
        card = MealCard(
            owner_id=user.id,
            card_number=card_number,
            status=CardStatus.ACTIVE,
        )
        self.db.add(card)
        self.db.flush()

        if request.opening_balance > 0:
            card, _ = self.ledger_service.post(
                card.id,
                request.opening_balance,
                TransactionType.ADJUSTMENT,
                TransactionDirection.CREDIT,
                actor_id=actor_id,
                description="Opening balance",
            )

        logger.info("Provisioned card %s for %s", card.card_number, user.email)
        return card

    def get_card(self, card_id: int) -> MealCard:
        card = self.db.get(MealCard, card_id)
        if not card:
            raise NotFound(f"Card {card_id} not found")
        return card

    def change_status(self, card_id: int, new_status: CardStatus) -> MealCard:
        """Block or unblock a card."""
        card = self.get_card(card_id)

        if not card.can_transition_to(new_status):
            raise InvalidState(
                f"Cannot transition from {card.status.value} "
                f"to {new_status.value}"
            )

        card.status = new_status
        self.db.flush()

        logger.info("Card %s is now %s", card.card_number, new_status.value)
        return card

    def find_by_card_number(self, card_number: str) -> tuple[MealCard, User] | None:
        """
        Find a card and its student.

        Returns None unless the card, its owner and the owner's
        student profile all exist.
        """
        card = self.ledger_service.get_account(card_number)
        if card is None:
            return None

        owner = card.owner
        if owner is None or owner.profile is None:
            return None
        return card, owner

    def get_card_for_owner(self, owner_id: int) -> MealCard | None:
        return self.db.execute(
            select(MealCard).where(MealCard.owner_id == owner_id)
        ).scalar_one_or_none()

    def get_dashboard(
        self, owner_id: int
    ) -> tuple[MealCard, list[Transaction]] | None:
        """A student's card and its transactions, newest first."""
        card = self.get_card_for_owner(owner_id)
        if card is None:
            return None
        return card, self.ledger_service.get_transactions(card.id)

    def list_users(self) -> list[User]:
        users = self.db.execute(select(User).order_by(User.id)).scalars().all()
        return list(users)
