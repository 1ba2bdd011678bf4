"""
Menu service — the items a cashier can put in a cart.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from meal_card.models.menu_item import MenuItem
from meal_card.services.ledger_service import to_amount


class MenuService:

    def __init__(self, db: Session):
        self.db = db

    def add_item(
        self, name: str, price: Decimal, category: str, is_active: bool = True
    ) -> MenuItem:
        item = MenuItem(
            name=name,
            price=to_amount(price),
            category=category,
            is_active=is_active,
        )
        self.db.add(item)
        self.db.flush()
        return item

    def list_active_items(self) -> list[MenuItem]:
        items = self.db.execute(
            select(MenuItem)
            .where(MenuItem.is_active.is_(True))
            .order_by(MenuItem.id)
        ).scalars().all()
        return list(items)
