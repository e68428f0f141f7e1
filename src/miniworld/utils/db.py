"""Schema management for the SQL providers configured on the miniworld domain.

The memory provider used in development and tests has no schema, so both
helpers only touch ``postgresql`` and ``sqlite`` providers.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield name, provider


def _register_models(domain: Domain, provider_name: str) -> None:
    """Build the repository DAOs so their tables land in the provider's metadata."""
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider_name:
            domain.repository_for(record.cls)._dao  # noqa: B018

    # Outbox tables are internal and only exist when the outbox is enabled
    outbox_repos = getattr(domain, "_outbox_repos", None) or {}
    if provider_name in outbox_repos:
        outbox_repos[provider_name]._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create every table the domain needs."""
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            _register_models(domain, name)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for _, provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
