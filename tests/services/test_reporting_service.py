"""
Tests for the ReportingService.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from meal_card.models.enums import (
    CardStatus,
    Role,
    TransactionDirection,
    TransactionType,
)
from meal_card.schemas.purchase import CartLine
from meal_card.services.card_service import CardService
from meal_card.services.ledger_service import LedgerService
from meal_card.services.purchase_service import PurchaseService
from meal_card.services.reporting_service import ReportingService


# 2024-03-06 is a Wednesday
NOW = datetime(2024, 3, 6, 15, 30)


def post(ledger, card, amount, txn_type, direction, when, description=None):
    ledger.post(card.id, amount, txn_type, direction,
                description=description, created_at=when)


class TestTotals:

    def test_counts_and_float(self, db_session, make_student, make_staff):
        make_staff(Role.ADMIN)
        first = make_student(card_number="C2001", balance="100.00")
        make_student(card_number="C2002", balance="50.25")
        CardService(db_session).change_status(first.id, CardStatus.BLOCKED)
        db_session.commit()

        stats = ReportingService(db_session).get_statistics(now=NOW)

        assert stats.total_students == 2
        assert stats.active_cards == 1
        assert stats.total_balance_float == Decimal("150.25")

    def test_empty_store(self, db_session):
        stats = ReportingService(db_session).get_statistics(now=NOW)

        assert stats.total_students == 0
        assert stats.total_balance_float == Decimal("0.00")
        assert stats.todays_transactions_count == 0
        assert stats.top_items == []
        assert len(stats.weekly_transactions) == 7


class TestToday:

    def test_only_todays_transactions_counted(self, db_session, make_student):
        card = make_student(balance="0")
        ledger = LedgerService(db_session)
        midnight = NOW.replace(hour=0, minute=0)

        post(ledger, card, "10.00", TransactionType.RECHARGE,
             TransactionDirection.CREDIT, midnight - timedelta(seconds=1))
        post(ledger, card, "20.00", TransactionType.RECHARGE,
             TransactionDirection.CREDIT, midnight)
        post(ledger, card, "5.00", TransactionType.PURCHASE,
             TransactionDirection.DEBIT, NOW)
        post(ledger, card, "1.00", TransactionType.RECHARGE,
             TransactionDirection.CREDIT, midnight + timedelta(days=1))
        db_session.commit()

        stats = ReportingService(db_session).get_statistics(now=NOW)

        assert stats.todays_transactions_count == 2
        assert stats.todays_transactions_value == Decimal("25.00")


class TestWeekly:

    def test_grouped_by_weekday(self, db_session, make_student):
        card = make_student(balance="0")
        ledger = LedgerService(db_session)
        monday = datetime(2024, 3, 4, 9, 0)

        post(ledger, card, "50.00", TransactionType.RECHARGE,
             TransactionDirection.CREDIT, monday)
        post(ledger, card, "10.00", TransactionType.PURCHASE,
             TransactionDirection.DEBIT, monday + timedelta(hours=3))
        post(ledger, card, "10.00", TransactionType.PURCHASE,
             TransactionDirection.DEBIT, monday + timedelta(days=2))
        post(ledger, card, "5.00", TransactionType.REFUND,
             TransactionDirection.CREDIT, monday + timedelta(days=2))
        db_session.commit()

        weekly = ReportingService(db_session).get_statistics(now=NOW).weekly_transactions
        by_day = {w.name: (w.recharge, w.purchase) for w in weekly}

        assert [w.name for w in weekly] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert by_day["Mon"] == (1, 1)
        assert by_day["Wed"] == (0, 1)
        assert by_day["Tue"] == (0, 0)


class TestTopItems:

    def _charge(self, db_session, card, cashier, *lines):
        PurchaseService(db_session).charge(
            card.id,
            [CartLine(name=n, unit_price=Decimal(p), quantity=q) for n, p, q in lines],
            cashier.id,
        )

    def test_ranked_by_value(self, db_session, make_student, make_staff):
        card = make_student(balance="1000.00")
        cashier = make_staff(Role.CASHIER)

        self._charge(db_session, card, cashier, ("Curry", "75.50", 1))
        self._charge(db_session, card, cashier, ("Burger", "50.00", 1))
        self._charge(db_session, card, cashier, ("Burger", "50.00", 1))
        db_session.commit()

        top = ReportingService(db_session).get_statistics(now=NOW).top_items

        assert [(t.name, t.value) for t in top] == [
            ("Burger", Decimal("100.00")),
            ("Curry", Decimal("75.50")),
        ]

    def test_whole_cart_credited_to_first_item(self, db_session, make_student, make_staff):
        card = make_student(balance="100.00")
        cashier = make_staff(Role.CASHIER)

        self._charge(db_session, card, cashier, ("Burger", "20.00", 1), ("Coffee", "25.00", 1))
        db_session.commit()

        top = ReportingService(db_session).get_statistics(now=NOW).top_items
        assert [(t.name, t.value) for t in top] == [("Burger", Decimal("45.00"))]

    def test_ties_keep_first_seen_order(self, db_session, make_student, make_staff):
        card = make_student(balance="1000.00")
        cashier = make_staff(Role.CASHIER)
        ledger = LedgerService(db_session)

        # Newest first: "Dosa" is seen before "Idli"
        post(ledger, card, "40.00", TransactionType.PURCHASE,
             TransactionDirection.DEBIT, NOW - timedelta(hours=2), "Idli (x1)")
        post(ledger, card, "40.00", TransactionType.PURCHASE,
             TransactionDirection.DEBIT, NOW - timedelta(hours=1), "Dosa (x1)")
        db_session.commit()

        top = ReportingService(db_session).get_statistics(now=NOW).top_items
        assert [t.name for t in top] == ["Dosa", "Idli"]

    def test_truncated_to_limit(self, db_session, make_student, make_staff):
        card = make_student(balance="1000.00")
        cashier = make_staff(Role.CASHIER)
        for index in range(7):
            self._charge(db_session, card, cashier, (f"Item {index}", f"{10 + index}.00", 1))
        db_session.commit()

        top = ReportingService(db_session).get_statistics(now=NOW).top_items
        assert len(top) == 5
        assert top[0].name == "Item 6"

    def test_names_parsed_from_description(self, db_session, make_student):
        card = make_student(balance="100.00")
        ledger = LedgerService(db_session)
        post(ledger, card, "49.25", TransactionType.PURCHASE,
             TransactionDirection.DEBIT, NOW, "Veggie Burger (x1), Iced Coffee (x1)")
        post(ledger, card, "5.00", TransactionType.PURCHASE,
             TransactionDirection.DEBIT, NOW)
        db_session.commit()

        top = ReportingService(db_session).get_statistics(now=NOW).top_items
        assert [(t.name, t.value) for t in top] == [
            ("Veggie Burger", Decimal("49.25")),
            ("Unknown", Decimal("5.00")),
        ]
