"""Inventory bounded context — stock ledger, stock alerts and the reference data they read.

Tracks on-hand and reserved quantities per product per warehouse, raises and
drives stock alerts, and owns the product and warehouse records those
operations consult. All aggregates here are standard CQRS aggregates.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

inventory = Domain(name="inventory")

logger = structlog.get_logger(__name__)
