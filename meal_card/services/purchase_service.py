"""
Purchase service — point-of-sale charges against a card.

Checks run in a fixed order and the first failure wins:
1. The card exists
2. The card is ACTIVE
3. The cart is non-empty, every line is well-formed and
   the total is positive
4. The balance covers the total

Only then is the card debited. A charge is all or nothing;
there is no partial debit.
"""

import logging
from decimal import Decimal
from typing import Sequence

from pydantic import ValidationError
from sqlalchemy.orm import Session

from meal_card.exceptions import (
    CardBlocked,
    InsufficientFunds,
    InvalidAmount,
    NotFound,
)
from meal_card.models.enums import (
    CardStatus,
    TransactionDirection,
    TransactionType,
)
from meal_card.models.menu_item import MenuItem
from meal_card.schemas.purchase import CartLine
from meal_card.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

DEFAULT_LINE_NAME = "Item"


def summarize_lines(lines: Sequence[CartLine]) -> str:
    """Human-readable cart, e.g. 'Veggie Burger (x2), Iced Coffee (x1)'."""
    return ", ".join(
        f"{line.name or DEFAULT_LINE_NAME} (x{line.quantity})" for line in lines
    )


class PurchaseService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger_service = LedgerService(db)

    def _validate_lines(self, lines: Sequence[CartLine | dict]) -> list[CartLine]:
        """Parse cart lines and fill in missing names from the menu."""
        try:
            cart = [CartLine.model_validate(line) for line in lines]
        except ValidationError as e:
            raise InvalidAmount(f"Invalid cart line: {e}")

        for index, line in enumerate(cart):
            if line.name:
                continue
            item = self.db.get(MenuItem, line.item_id) if line.item_id else None
            name = item.name if item else DEFAULT_LINE_NAME
            cart[index] = line.model_copy(update={"name": name})
        return cart

    def charge(
        self,
        account_id: int,
        lines: Sequence[CartLine | dict],
        cashier_id: int,
    ) -> Decimal:
        """Debit a card for a cart and return the new balance."""
        card = self.ledger_service.get_account(account_id, for_update=True)
        if card is None:
            raise NotFound(f"Card {account_id} not found")

        if card.status != CardStatus.ACTIVE:
            raise CardBlocked(f"Card {card.card_number} is blocked")

        if not lines:
            raise InvalidAmount("Cart is empty")

        cart = self._validate_lines(lines)
        total = sum((line.line_total for line in cart), Decimal("0"))
        if total <= 0:
            raise InvalidAmount(f"Cart total must be positive, got {total}")

        if card.balance < total:
            raise InsufficientFunds(
                f"Insufficient balance: available={card.balance}, "
                f"requested={total}"
            )

        card, _ = self.ledger_service.post(
            card.id,
            total,
            TransactionType.PURCHASE,
            TransactionDirection.DEBIT,
            actor_id=cashier_id,
            description=summarize_lines(cart),
            lines=[
                {
                    "item_id": line.item_id,
                    "name": line.name,
                    "unit_price": str(line.unit_price),
                    "quantity": line.quantity,
                }
                for line in cart
            ],
        )

        logger.info(
            "Charged %s to card %s by cashier %s",
            total, card.card_number, cashier_id,
        )
        return card.balance
