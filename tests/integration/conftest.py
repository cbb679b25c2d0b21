"""Fixtures for tests that drive the assembled application.

Requests go through ``app``'s middleware, which pushes the inventory or
procurement domain context based on the URL prefix.
"""

import os

import pytest


@pytest.fixture(scope="session")
def app(request):
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from app import app as stockroom_app

    return stockroom_app


@pytest.fixture(autouse=True)
def run_around_tests(app):
    """Reset both domains after every test."""
    yield

    from inventory.domain import inventory
    from procurement.domain import procurement

    for domain in (inventory, procurement):
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            for _, broker in domain.brokers.items():
                broker._data_reset()
            domain.event_store.store._data_reset()
