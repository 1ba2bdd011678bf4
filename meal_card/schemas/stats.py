"""
Pydantic schemas for the admin statistics.
"""

from decimal import Decimal

from pydantic import BaseModel


class WeekdayActivity(BaseModel):
    name: str
    recharge: int = 0
    purchase: int = 0


class TopItem(BaseModel):
    name: str
    value: Decimal


class StatisticsResponse(BaseModel):
    total_students: int
    active_cards: int
    total_balance_float: Decimal
    todays_transactions_count: int
    todays_transactions_value: Decimal
    weekly_transactions: list[WeekdayActivity]
    top_items: list[TopItem]
