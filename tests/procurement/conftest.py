import os

import pytest


@pytest.fixture(scope="session")
def _procurement_domain(request):
    """Initialize the procurement domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from procurement.domain import procurement

    procurement.init()
    return procurement


@pytest.fixture(autouse=True)
def run_around_tests(_procurement_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _procurement_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
