from protean.domain import Domain
from sqlalchemy import create_engine


def _engines(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in ("sqlite", "postgresql"):
            yield provider, create_engine(provider.conn_info["database_uri"])


def setup_db(domain: Domain):
    """Setup database schema"""
    with domain.domain_context():
        for provider, engine in _engines(domain):
            # Ensure live entities are loaded and registered with SQLAlchemy
            #   We do this by accessing the _dao attribute of the repository, forcing
            #   the entity to be loaded and registered with SQLAlchemy.
            for _, aggregate_record in domain.registry.aggregates.items():
                if aggregate_record.cls.meta_.provider == provider.name:
                    domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

            for _, entity_record in domain.registry.entities.items():
                if entity_record.cls.meta_.provider == provider.name:
                    domain.repository_for(entity_record.cls)._dao  # noqa: B018

            # Create RDBMS Tables
            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop database schema"""
    with domain.domain_context():
        for provider, engine in _engines(domain):
            provider._metadata.drop_all(engine)
