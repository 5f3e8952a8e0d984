"""Schema management for SQL-backed providers of the order service.

The memory provider used in development and tests keeps no schema, so every
function here skips it.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

from ordering.utils.logging import get_logger

logger = get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield name, provider, create_engine(provider.conn_info["database_uri"])


def _register_models(domain: Domain, provider_name: str) -> list[str]:
    """Build the DAO of every persisted element so its table joins the provider's metadata."""
    registered = []
    records = list(domain.registry.aggregates.items()) + list(domain.registry.entities.items())
    for _, record in records:
        if record.cls.meta_.provider == provider_name:
            domain.repository_for(record.cls)._dao  # noqa: B018
            registered.append(record.cls.__name__)
    return registered


def setup_db(domain: Domain) -> None:
    with domain.domain_context():
        for name, provider, engine in _sql_providers(domain):
            models = _register_models(domain, name)
            provider._metadata.create_all(engine)
            logger.info("Schema created", provider=name, models=models)


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for name, provider, engine in _sql_providers(domain):
            _register_models(domain, name)
            provider._metadata.drop_all(engine)
            logger.info("Schema dropped", provider=name)


def reset_db(domain: Domain) -> None:
    """Drop and recreate the schema, losing all orders and products."""
    drop_db(domain)
    setup_db(domain)
