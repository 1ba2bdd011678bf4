"""
Declarative base for all models.

Engines and sessions are owned by meal_card.store.Store,
never by module-level globals.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
