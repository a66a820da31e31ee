import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Initialise the ordering domain once and keep its context pushed for the whole run."""
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from ordering.domain import ordering

    ordering.init()
    ordering.domain_context().push()


_LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "integration": pytest.mark.integration,
    "bdd": pytest.mark.bdd,
}


def pytest_collection_modifyitems(config, items):
    """Mark each test with the layer directory it lives in."""
    for item in items:
        layers = [part for part in Path(item.fspath).parts if part in _LAYER_MARKERS]
        if not layers:
            continue

        item.add_marker(_LAYER_MARKERS[layers[-1]])
        if layers[-1] == "integration" and item.get_closest_marker("fast") is None:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from ordering.domain import ordering
    from ordering.utils.db import drop_db, setup_db

    setup_db(ordering)

    yield

    drop_db(ordering)


@pytest.fixture(autouse=True)
def run_around_tests():
    yield

    from notifications.channel import reset_channels
    from notifications.document import reset_renderer
    from protean import current_domain

    for provider in current_domain.providers.values():
        provider._data_reset()
    current_domain.event_store.store._data_reset()

    # Adapters are process singletons; drop them so recorded deliveries don't leak
    reset_channels()
    reset_renderer()
