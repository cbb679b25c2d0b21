import os

import pytest


@pytest.fixture(scope="session")
def _inventory_domain(request):
    """Initialize the inventory domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from inventory.domain import inventory

    inventory.init()
    return inventory


@pytest.fixture(autouse=True)
def run_around_tests(_inventory_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _inventory_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
