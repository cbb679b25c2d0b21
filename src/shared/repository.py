"""Repository helpers used by command handlers and read-side queries."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from shared.errors import NotFound

PAGE_SIZE = 500


def get_or_raise(aggregate_cls, identifier, label: str | None = None):
    """Load an aggregate by id, translating a miss into ``NotFound``."""
    try:
        return current_domain.repository_for(aggregate_cls).get(str(identifier))
    except ObjectNotFoundError as exc:
        name = label or aggregate_cls.__name__
        raise NotFound(f"{name} {identifier} not found", details={"id": str(identifier)}) from exc


def fetch_all(aggregate_cls, **filters) -> list:
    """Return every aggregate matching ``filters``, paging through the store."""
    dao = current_domain.repository_for(aggregate_cls)._dao
    items = []
    offset = 0
    while True:
        query = dao.query.filter(**filters) if filters else dao.query
        page = query.order_by("id").offset(offset).limit(PAGE_SIZE).all()
        items.extend(page.items)
        if len(page.items) < PAGE_SIZE:
            return items
        offset += PAGE_SIZE


def fetch_first(aggregate_cls, **filters):
    """Return the first aggregate matching ``filters``, or None."""
    dao = current_domain.repository_for(aggregate_cls)._dao
    results = dao.query.filter(**filters).limit(1).all()
    return results.items[0] if results.items else None


def get_active_or_raise(aggregate_cls, identifier, label: str | None = None):
    """Like ``get_or_raise``, but a deactivated aggregate counts as missing."""
    aggregate = get_or_raise(aggregate_cls, identifier, label=label)
    if not aggregate.is_active:
        name = label or aggregate_cls.__name__
        raise NotFound(f"{name} {identifier} not found", details={"id": str(identifier)})
    return aggregate
