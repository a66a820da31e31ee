"""Schema management for relational providers (PostgreSQL in production).

The in-memory provider used in development and tests needs no schema, so
both commands are no-ops unless ``[production]`` settings are active.
"""

from itertools import chain

from protean.domain import Domain
from sqlalchemy import create_engine

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    return [p for p in domain.providers.values() if p.conn_info["provider"] in _RELATIONAL_PROVIDERS]


def _register_models(domain: Domain, provider) -> None:
    # Building the DAO is what registers the SQLAlchemy model on the provider's metadata.
    records = chain(domain.registry.aggregates.values(), domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    with domain.domain_context():
        for provider in _relational_providers(domain):
            _register_models(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for provider in _relational_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
