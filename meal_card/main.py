"""
Meal Card Manager — application entry point.

Builds the store, loads the demo data and hands out the
data-access interface that UI collaborators call.
"""

from meal_card.api import MealCardApi
from meal_card.config import Settings, get_settings
from meal_card.logging_config import configure_logging


def create_app(settings: Settings | None = None) -> MealCardApi:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    return MealCardApi.create(settings)
