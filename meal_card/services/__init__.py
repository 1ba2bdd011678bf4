"""Business logic services."""

from meal_card.services.ledger_service import LedgerService
from meal_card.services.recharge_service import RechargeService
from meal_card.services.purchase_service import PurchaseService
from meal_card.services.reporting_service import ReportingService
from meal_card.services.card_service import CardService
from meal_card.services.menu_service import MenuService

__all__ = [
    "LedgerService",
    "RechargeService",
    "PurchaseService",
    "ReportingService",
    "CardService",
    "MenuService",
]
