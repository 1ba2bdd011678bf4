"""
Pydantic schemas for the point of sale.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class MenuItemResponse(BaseModel):
    id: int
    name: str
    price: Decimal
    category: str

    model_config = {"from_attributes": True}


class CartLine(BaseModel):
    """One line of a cashier's cart. Not persisted on its own."""
    item_id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=100)
    unit_price: Decimal = Field(ge=0, decimal_places=2)
    quantity: int = Field(gt=0)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity
