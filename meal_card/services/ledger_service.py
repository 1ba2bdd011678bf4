"""
Ledger service — the only writer of card balances.

This service enforces the fundamental rules:
1. A balance never goes below zero
2. Every balance change is paired with exactly one transaction
   of the same amount and direction
3. Transactions are immutable (append-only)

No other service touches MealCard.balance or inserts a
Transaction directly. All money movement goes through post().
"""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from sqlalchemy import select
from sqlalchemy.orm import Session

from meal_card.exceptions import InvalidAmount, InvalidState, NotFound
from meal_card.models.card import MealCard
from meal_card.models.enums import TransactionDirection, TransactionType
from meal_card.models.transaction import Transaction

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_amount(value) -> Decimal:
    """
    Convert user input to a two-decimal money amount.

    Floats go through str() so 0.1 stays 0.1 instead of
    0.1000000000000000055511151231257827. Anything finer
    than a cent is rejected rather than rounded.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmount(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise InvalidAmount(f"Invalid amount: {value!r}")
    if amount != amount.quantize(CENT):
        raise InvalidAmount(f"Amount has more than two decimal places: {value!r}")
    return amount.quantize(CENT)


class LedgerService:
    """
    Balance and transaction operations.

    The service takes a session as a constructor argument, so
    the caller controls the transaction boundary: everything
    done through one service instance is committed or rolled
    back together.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_account(
        self, key: int | str, for_update: bool = False
    ) -> MealCard | None:
        """
        Look a card up by primary key (int) or card number (str).

        Card numbers are matched case-insensitively. With
        for_update=True the row is locked until the unit of
        work ends, on databases that support row locks.
        """
        if isinstance(key, str):
            stmt = select(MealCard).where(
                MealCard.card_number == key.strip().upper()
            )
        else:
            stmt = select(MealCard).where(MealCard.id == key)

        if for_update:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def mutate_account_balance(self, account_id: int, delta: Decimal) -> MealCard:
        """
        Apply delta to a card balance.

        Must only be called from post(), which writes the matching
        transaction in the same unit of work.
        """
        card = self.get_account(account_id, for_update=True)
        if card is None:
            raise NotFound(f"Card {account_id} not found")

        new_balance = card.balance + delta
        if new_balance < 0:
            raise InvalidState(
                f"Balance of card {card.card_number} cannot go negative: "
                f"balance={card.balance}, change={delta}"
            )

        card.balance = new_balance
        self.db.flush()
        return card

    def append_transaction(
        self,
        account_id: int,
        transaction_type: TransactionType,
        direction: TransactionDirection,
        amount: Decimal,
        actor_id: int | None = None,
        description: str | None = None,
        lines: list[dict] | None = None,
        created_at: datetime | None = None,
    ) -> Transaction:
        """Record a balance change. Must only be called from post()."""
        txn = Transaction(
            card_id=account_id,
            transaction_type=transaction_type,
            direction=direction,
            amount=amount,
            actor_id=actor_id,
            description=description,
            lines=lines,
            created_at=created_at or datetime.now(),
        )
        self.db.add(txn)
        self.db.flush()
        return txn

    def post(
        self,
        account_id: int,
        amount,
        transaction_type: TransactionType,
        direction: TransactionDirection,
        actor_id: int | None = None,
        description: str | None = None,
        lines: list[dict] | None = None,
        created_at: datetime | None = None,
    ) -> tuple[MealCard, Transaction]:
        """
        Change a balance and record the transaction as one step.

        If the balance check fails, nothing is written. The
        caller is responsible for committing the session.
        """
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidAmount(f"Amount must be positive, got {amount}")

        delta = amount if direction == TransactionDirection.CREDIT else -amount
        card = self.mutate_account_balance(account_id, delta)
        txn = self.append_transaction(
            account_id=card.id,
            transaction_type=transaction_type,
            direction=direction,
            amount=amount,
            actor_id=actor_id,
            description=description,
            lines=lines,
            created_at=created_at,
        )

        logger.info(
            "Posted %s %s %s on card %s, balance now %s",
            transaction_type.value, direction.value, amount,
            card.card_number, card.balance,
        )
        return card, txn

    def get_transactions(self, account_id: int) -> list[Transaction]:
        """Return all transactions for a card, newest first."""
        txns = self.db.execute(
            select(Transaction)
            .where(Transaction.card_id == account_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        ).scalars().all()
        return list(txns)

    def get_all_transactions(self) -> list[Transaction]:
        """Return every transaction in the ledger, newest first."""
        txns = self.db.execute(
            select(Transaction)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        ).scalars().all()
        return list(txns)
