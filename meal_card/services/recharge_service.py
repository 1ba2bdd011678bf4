"""
Recharge service — the recharge request workflow.

    PENDING ──approve──▶ APPROVED
       │
       └────reject────▶ REJECTED

A request leaves PENDING exactly once. The transition is a
compare-and-set (UPDATE ... WHERE status = 'PENDING'), so two
reviewers racing on the same request cannot both win, and a
retried click gets AlreadyProcessed instead of a second credit.
"""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from meal_card.exceptions import AlreadyProcessed, InvalidAmount, NotFound
from meal_card.models.card import MealCard
from meal_card.models.enums import (
    RechargeStatus,
    TransactionDirection,
    TransactionType,
)
from meal_card.models.recharge_request import RechargeRequest
from meal_card.models.user import User
from meal_card.schemas.recharge import (
    PendingRechargeResponse,
    RechargeRequestResponse,
)
from meal_card.services.ledger_service import LedgerService, to_amount

logger = logging.getLogger(__name__)


class RechargeService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger_service = LedgerService(db)

    def submit(self, account_id: int, amount, requester_id: int) -> RechargeRequest:
        """Create a PENDING recharge request for a card."""
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidAmount(f"Recharge amount must be positive, got {amount}")

        if self.ledger_service.get_account(account_id) is None:
            raise NotFound(f"Card {account_id} not found")

        request = RechargeRequest(
            card_id=account_id,
            amount=amount,
            status=RechargeStatus.PENDING,
            requested_by=requester_id,
            requested_at=datetime.now(),
        )
        self.db.add(request)
        self.db.flush()

        logger.info(
            "Recharge request %s submitted for card %s: %s",
            request.id, account_id, amount,
        )
        return request

    def get_request(self, request_id: int) -> RechargeRequest:
        request = self.db.get(RechargeRequest, request_id)
        if not request:
            raise NotFound(f"Recharge request {request_id} not found")
        return request

    def _claim(
        self,
        request: RechargeRequest,
        reviewer_id: int,
        new_status: RechargeStatus,
        notes: str | None = None,
    ) -> None:
        """Move a request out of PENDING, or fail if someone already did."""
        values = {
            "status": new_status,
            "reviewed_by": reviewer_id,
            "reviewed_at": datetime.now(),
        }
        if notes is not None:
            values["notes"] = notes

        result = self.db.execute(
            update(RechargeRequest)
            .where(
                RechargeRequest.id == request.id,
                RechargeRequest.status == RechargeStatus.PENDING,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise AlreadyProcessed(
                f"Recharge request {request.id} has already been processed"
            )
        self.db.refresh(request)

    def approve(self, request_id: int, reviewer_id: int) -> RechargeRequest:
        """
        Approve a pending request and credit the card.

        The status change and the credit are written in the
        caller's unit of work. If the credit fails, rolling back
        that unit of work also undoes the approval.
        """
        request = self.get_request(request_id)
        if not request.is_pending:
            raise AlreadyProcessed(
                f"Recharge request {request_id} is already "
                f"{request.status.value}"
            )
        if self.ledger_service.get_account(request.card_id) is None:
            raise NotFound(f"Card {request.card_id} not found")

        self._claim(request, reviewer_id, RechargeStatus.APPROVED)
        self.ledger_service.post(
            request.card_id,
            request.amount,
            TransactionType.RECHARGE,
            TransactionDirection.CREDIT,
            actor_id=reviewer_id,
            description=f"Recharge request #{request.id}",
        )

        logger.info("Recharge request %s approved by %s", request_id, reviewer_id)
        return request

    def reject(
        self, request_id: int, reviewer_id: int, notes: str | None = None
    ) -> RechargeRequest:
        """Reject a pending request. No balance effect."""
        request = self.get_request(request_id)
        if not request.is_pending:
            raise AlreadyProcessed(
                f"Recharge request {request_id} is already "
                f"{request.status.value}"
            )

        self._claim(request, reviewer_id, RechargeStatus.REJECTED, notes=notes)

        logger.info("Recharge request %s rejected by %s", request_id, reviewer_id)
        return request

    def list_pending(self) -> list[PendingRechargeResponse]:
        """Pending requests, oldest first, with student name and card number."""
        rows = self.db.execute(
            select(RechargeRequest, MealCard.card_number, User.name)
            .outerjoin(MealCard, RechargeRequest.card_id == MealCard.id)
            .outerjoin(User, MealCard.owner_id == User.id)
            .where(RechargeRequest.status == RechargeStatus.PENDING)
            .order_by(
                RechargeRequest.requested_at,
                RechargeRequest.id,
            )
        ).all()

        return [
            PendingRechargeResponse(
                **RechargeRequestResponse.model_validate(request).model_dump(),
                student_name=student_name or "Unknown",
                card_number=card_number or "Unknown",
            )
            for request, card_number, student_name in rows
        ]
