"""
Demo data loaded into a fresh store.

Balances, requests and purchases are produced through the
services rather than inserted as rows, so the seeded store
already satisfies every ledger invariant.
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from meal_card.models.enums import Role
from meal_card.schemas.card import StudentProvision
from meal_card.schemas.purchase import CartLine
from meal_card.services.card_service import CardService
from meal_card.services.menu_service import MenuService
from meal_card.services.purchase_service import PurchaseService
from meal_card.services.recharge_service import RechargeService

logger = logging.getLogger(__name__)

STAFF = [
    ("Admin User", "admin@campus.edu", Role.ADMIN),
    ("Manager User", "manager@campus.edu", Role.MANAGER),
    ("Cashier User", "cashier@campus.edu", Role.CASHIER),
]

STUDENTS = ["surya", "syam", "varun", "saikiran", "murali", "ganesh"]

DEPARTMENTS = [
    "Computer Science",
    "Mechanical Engineering",
    "Electrical Engineering",
    "Biotechnology",
    "Civil Engineering",
    "Chemical Engineering",
]

OPENING_BALANCES = [
    Decimal("184.20"),
    Decimal("251.75"),
    Decimal("132.40"),
    Decimal("297.10"),
    Decimal("166.85"),
    Decimal("210.00"),
]

MENU = [
    ("Veggie Burger", Decimal("50.00"), "VEG", True),
    ("Chicken Curry", Decimal("75.50"), "NON-VEG", True),
    ("Paneer Tikka", Decimal("65.00"), "VEG", True),
    ("Fish and Chips", Decimal("80.00"), "NON-VEG", True),
    ("Dal Makhani", Decimal("60.00"), "VEG", True),
    ("Egg Fried Rice", Decimal("55.25"), "NON-VEG", True),
    ("Iced Coffee", Decimal("30.00"), "BEVERAGES", True),
    ("Masala Dosa", Decimal("45.00"), "VEG", False),
]


def seed_store(db: Session) -> None:
    """Populate an empty store. The caller commits."""
    cards = CardService(db)
    menu = MenuService(db)
    recharges = RechargeService(db)
    purchases = PurchaseService(db)

    staff = {role: cards.create_user(name, email, role) for name, email, role in STAFF}
    manager = staff[Role.MANAGER]
    cashier = staff[Role.CASHIER]

    student_cards = []
    for index, name in enumerate(STUDENTS):
        student_cards.append(cards.provision_student(
            StudentProvision(
                name=name.capitalize(),
                email=f"{name}@campus.edu",
                card_number=f"C100{index + 1}",
                enrollment_no=f"ENR100{index + 1}",
                department=DEPARTMENTS[index % len(DEPARTMENTS)],
                year=(index % 4) + 1,
                opening_balance=OPENING_BALANCES[index],
            ),
            actor_id=staff[Role.ADMIN].id,
        ))

    items = {
        name: menu.add_item(name, price, category, is_active)
        for name, price, category, is_active in MENU
    }

    first, second = student_cards[0], student_cards[1]

    approved = recharges.submit(first.id, Decimal("200.00"), first.owner_id)
    recharges.approve(approved.id, manager.id)
    recharges.submit(second.id, Decimal("100.00"), second.owner_id)

    for card, item_name in ((first, "Veggie Burger"), (second, "Chicken Curry")):
        item = items[item_name]
        purchases.charge(
            card.id,
            [CartLine(item_id=item.id, name=item.name, unit_price=item.price, quantity=1)],
            cashier.id,
        )

    logger.info(
        "Seeded %d staff, %d students, %d menu items",
        len(staff), len(student_cards), len(items),
    )
