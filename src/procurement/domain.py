"""Procurement bounded context — suppliers and the purchase-order workflow.

Purchase orders reference products and warehouses of the inventory context
by id only. Receiving goods against an order records what arrived; it does
not move stock in the ledger.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

procurement = Domain(name="procurement")

logger = structlog.get_logger(__name__)
