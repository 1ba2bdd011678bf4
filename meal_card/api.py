"""
Data-access interface for UI collaborators.

This layer is thin. Each method runs one unit of work on the
store, delegates the business logic to a service and turns
domain errors into result objects. A failed operation rolls
back everything it did before the error surfaced.
"""

import logging
from datetime import datetime
from typing import Sequence

from meal_card.config import Settings, get_settings
from meal_card.exceptions import MealCardError
from meal_card.models.enums import CardStatus
from meal_card.schemas.card import CardLookupResponse, CardResponse, StudentProvision
from meal_card.schemas.purchase import CartLine, MenuItemResponse
from meal_card.schemas.recharge import (
    PendingRechargeResponse,
    RechargeRequestResponse,
)
from meal_card.schemas.results import (
    CardResult,
    ChargeResult,
    OperationError,
    RechargeSubmitResult,
    ReviewResult,
)
from meal_card.schemas.stats import StatisticsResponse
from meal_card.schemas.transaction import DashboardResponse, TransactionResponse
from meal_card.schemas.user import StudentResponse, UserResponse
from meal_card.seed import seed_store
from meal_card.services.card_service import CardService
from meal_card.services.menu_service import MenuService
from meal_card.services.purchase_service import PurchaseService
from meal_card.services.recharge_service import RechargeService
from meal_card.services.reporting_service import ReportingService
from meal_card.store import Store

logger = logging.getLogger(__name__)


def _failure(operation: str, exc: MealCardError) -> OperationError:
    logger.info("%s rejected: %s (%s)", operation, exc, exc.code.value)
    return OperationError.from_exception(exc)


class MealCardApi:

    def __init__(self, store: Store, settings: Settings | None = None):
        self.store = store
        self.settings = settings or get_settings()

    @classmethod
    def create(cls, settings: Settings | None = None) -> "MealCardApi":
        """Build a store, create the schema and load the demo data if enabled."""
        settings = settings or get_settings()
        store = Store(settings.DATABASE_URL, echo=settings.DEBUG)
        store.create_schema()

        if settings.SEED_DATA:
            with store.transaction() as db:
                seed_store(db)

        logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)
        return cls(store, settings)

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> "MealCardApi":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- Cashier ---

    def list_active_items(self) -> list[MenuItemResponse]:
        with self.store.transaction() as db:
            items = MenuService(db).list_active_items()
            return [MenuItemResponse.model_validate(i) for i in items]

    def find_account_by_card_number(
        self, card_number: str
    ) -> CardLookupResponse | None:
        with self.store.transaction() as db:
            found = CardService(db).find_by_card_number(card_number)
            if found is None:
                return None
            card, owner = found
            return CardLookupResponse(
                card=CardResponse.model_validate(card),
                owner=StudentResponse.model_validate(owner),
            )

    def charge(
        self,
        account_id: int,
        lines: Sequence[CartLine | dict],
        cashier_id: int,
    ) -> ChargeResult:
        """Debit a card for a cart. Never raises for domain errors."""
        try:
            with self.store.transaction() as db:
                new_balance = PurchaseService(db).charge(account_id, lines, cashier_id)
        except MealCardError as e:
            return ChargeResult(error=_failure("charge", e))
        return ChargeResult(new_balance=new_balance)

    # --- Student ---

    def get_account_dashboard(self, owner_id: int) -> DashboardResponse | None:
        with self.store.transaction() as db:
            found = CardService(db).get_dashboard(owner_id)
            if found is None:
                return None
            card, transactions = found
            return DashboardResponse(
                card=CardResponse.model_validate(card),
                transactions=[
                    TransactionResponse.model_validate(t) for t in transactions
                ],
            )

    def submit_recharge(
        self, account_id: int, amount, requester_id: int
    ) -> RechargeSubmitResult:
        try:
            with self.store.transaction() as db:
                request = RechargeService(db).submit(account_id, amount, requester_id)
                response = RechargeRequestResponse.model_validate(request)
        except MealCardError as e:
            return RechargeSubmitResult(error=_failure("submit_recharge", e))
        return RechargeSubmitResult(request=response)

    # --- Manager ---

    def list_pending_recharges(self) -> list[PendingRechargeResponse]:
        with self.store.transaction() as db:
            return RechargeService(db).list_pending()

    def approve_recharge(self, request_id: int, reviewer_id: int) -> ReviewResult:
        try:
            with self.store.transaction() as db:
                request = RechargeService(db).approve(request_id, reviewer_id)
                response = RechargeRequestResponse.model_validate(request)
        except MealCardError as e:
            return ReviewResult(error=_failure("approve_recharge", e))
        return ReviewResult(request=response)

    def reject_recharge(
        self, request_id: int, reviewer_id: int, notes: str | None = None
    ) -> ReviewResult:
        try:
            with self.store.transaction() as db:
                request = RechargeService(db).reject(request_id, reviewer_id, notes)
                response = RechargeRequestResponse.model_validate(request)
        except MealCardError as e:
            return ReviewResult(error=_failure("reject_recharge", e))
        return ReviewResult(request=response)

    # --- Admin ---

    def get_statistics(self, now: datetime | None = None) -> StatisticsResponse:
        with self.store.transaction() as db:
            return ReportingService(db).get_statistics(
                now=now, top_limit=self.settings.TOP_ITEMS_LIMIT
            )

    def list_all_users(self) -> list[UserResponse]:
        with self.store.transaction() as db:
            return [UserResponse.model_validate(u) for u in CardService(db).list_users()]

    def provision_student(
        self, request: StudentProvision, actor_id: int | None = None
    ) -> CardResult:
        try:
            with self.store.transaction() as db:
                card = CardService(db).provision_student(request, actor_id=actor_id)
                response = CardResponse.model_validate(card)
        except MealCardError as e:
            return CardResult(error=_failure("provision_student", e))
        return CardResult(card=response)

    def set_card_status(self, card_id: int, status: CardStatus) -> CardResult:
        """Block or unblock a card."""
        try:
            with self.store.transaction() as db:
                card = CardService(db).change_status(card_id, status)
                response = CardResponse.model_validate(card)
        except MealCardError as e:
            return CardResult(error=_failure("set_card_status", e))
        return CardResult(card=response)
