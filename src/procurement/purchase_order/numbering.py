"""Order-number allocation.

``OrderNumberSequence`` is a single counter row. Allocation reads, increments
and saves it inside the unit of work that inserts the order. The creation
handler is serialized on ``ORDER_NUMBER_LOCK_KEY``, so two orders never share
a number and a failed insert rolls the counter back with it. A counter save
that races another worker fails its version check and is retried.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from procurement.domain import procurement

logger = structlog.get_logger(__name__)

ORDER_NUMBER_LOCK_KEY = "purchase-order-number"
SEQUENCE_ID = "purchase-order-number"
ORDER_NUMBER_PREFIX = "PO-"


def format_order_number(value: int) -> str:
    return f"{ORDER_NUMBER_PREFIX}{value:06d}"


@procurement.aggregate
class OrderNumberSequence:
    name = String(required=True, max_length=50)
    last_value = Integer(default=0, min_value=0)

    def advance(self) -> int:
        self.last_value = (self.last_value or 0) + 1
        return self.last_value


def allocate_order_number() -> str:
    """Advance the sequence and return the next ``PO-NNNNNN`` number.

    Must run inside the command handler that persists the order.
    """
    repo = current_domain.repository_for(OrderNumberSequence)
    try:
        sequence = repo.get(SEQUENCE_ID)
    except ObjectNotFoundError:
        sequence = OrderNumberSequence(id=SEQUENCE_ID, name=ORDER_NUMBER_LOCK_KEY)

    value = sequence.advance()
    repo.add(sequence)

    order_number = format_order_number(value)
    logger.info("order_number_allocated", order_number=order_number)
    return order_number
