"""
Tests for the store lifecycle, configuration and logging setup.
"""

import logging

import pytest

from meal_card.logging_config import configure_logging
from meal_card.main import create_app
from meal_card.models.enums import Role
from meal_card.services.card_service import CardService


class TestStoreTransaction:

    def test_commit_on_success(self, store):
        with store.transaction() as db:
            CardService(db).create_user("Admin", "admin@campus.edu", Role.ADMIN)

        with store.transaction() as db:
            assert len(CardService(db).list_users()) == 1

    def test_rollback_on_error(self, store):
        with pytest.raises(RuntimeError):
            with store.transaction() as db:
                CardService(db).create_user("Admin", "admin@campus.edu", Role.ADMIN)
                raise RuntimeError("boom")

        with store.transaction() as db:
            assert CardService(db).list_users() == []

    def test_closed_store_refuses_work(self, store):
        store.close()
        with pytest.raises(RuntimeError, match="closed"):
            with store.transaction():
                pass

    def test_close_is_idempotent(self, store):
        store.close()
        store.close()


def test_create_app_builds_seeded_store(settings):
    settings.SEED_DATA = True
    with create_app(settings) as api:
        assert len(api.list_all_users()) == 9


def test_configure_logging_does_not_duplicate_handlers():
    logger = configure_logging("DEBUG")
    handlers = list(logger.handlers)

    again = configure_logging(logging.WARNING)

    assert again is logger
    assert again.handlers == handlers
    assert again.level == logging.WARNING
