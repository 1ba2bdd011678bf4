"""
Reporting service — read-only statistics for the admin view.

Everything is computed from the current state of the store
on every call. Nothing here writes or caches.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from meal_card.models.card import MealCard
from meal_card.models.enums import CardStatus, Role, TransactionType
from meal_card.models.transaction import Transaction
from meal_card.models.user import User
from meal_card.schemas.stats import StatisticsResponse, TopItem, WeekdayActivity
from meal_card.services.ledger_service import LedgerService

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DEFAULT_TOP_ITEMS = 5


def purchased_item_name(txn: Transaction) -> str:
    """
    The item a purchase is credited to in the rankings.

    The whole purchase amount goes to the first name in its
    description ("Veggie Burger (x2), ..." -> "Veggie Burger").
    """
    name = (txn.description or "").split(" (x")[0].strip()
    return name or "Unknown"


class ReportingService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger_service = LedgerService(db)

    def count_students(self) -> int:
        return self.db.execute(
            select(func.count(User.id)).where(User.role == Role.STUDENT)
        ).scalar_one()

    def count_active_cards(self) -> int:
        return self.db.execute(
            select(func.count(MealCard.id)).where(
                MealCard.status == CardStatus.ACTIVE
            )
        ).scalar_one()

    def total_balance(self) -> Decimal:
        """Money held on all cards (the float)."""
        total = self.db.execute(
            select(func.coalesce(func.sum(MealCard.balance), 0))
        ).scalar()
        return Decimal(str(total)).quantize(Decimal("0.01"))

    def weekly_activity(
        self, transactions: list[Transaction]
    ) -> list[WeekdayActivity]:
        """Recharge and purchase counts per weekday, Monday first."""
        buckets = {day: WeekdayActivity(name=day) for day in WEEKDAYS}
        for txn in transactions:
            bucket = buckets[WEEKDAYS[txn.created_at.weekday()]]
            if txn.transaction_type == TransactionType.RECHARGE:
                bucket.recharge += 1
            elif txn.transaction_type == TransactionType.PURCHASE:
                bucket.purchase += 1
        return list(buckets.values())

    def top_items(
        self, transactions: list[Transaction], limit: int = DEFAULT_TOP_ITEMS
    ) -> list[TopItem]:
        """
        Items ranked by total purchase value, taken from the
        transaction descriptions.

        Equal values keep the order in which the items were first
        seen in the (newest first) transaction list.
        """
        totals: dict[str, Decimal] = {}
        for txn in transactions:
            if txn.transaction_type != TransactionType.PURCHASE:
                continue
            name = purchased_item_name(txn)
            totals[name] = totals.get(name, Decimal("0")) + txn.amount

        ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
        return [
            TopItem(name=name, value=value.quantize(Decimal("0.01")))
            for name, value in ranked[:limit]
        ]

    def get_statistics(
        self,
        now: datetime | None = None,
        top_limit: int = DEFAULT_TOP_ITEMS,
    ) -> StatisticsResponse:
        now = now or datetime.now()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end_of_day = start_of_day + timedelta(days=1)

        transactions = self.ledger_service.get_all_transactions()
        todays = [
            t for t in transactions
            if start_of_day <= t.created_at < end_of_day
        ]

        return StatisticsResponse(
            total_students=self.count_students(),
            active_cards=self.count_active_cards(),
            total_balance_float=self.total_balance(),
            todays_transactions_count=len(todays),
            todays_transactions_value=sum(
                (t.amount for t in todays), Decimal("0.00")
            ),
            weekly_transactions=self.weekly_activity(transactions),
            top_items=self.top_items(transactions, limit=top_limit),
        )
