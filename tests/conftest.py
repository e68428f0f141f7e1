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
    """Pytest hook to run before collecting tests.

    The domain reads its config overlay from PROTEAN_ENV when it is first
    imported, so the variable is set before any test module is collected.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def _miniworld_domain():
    """Initialize the miniworld domain once per session."""
    from miniworld.domain import miniworld

    miniworld.init()
    return miniworld


@pytest.fixture(scope="session", autouse=True)
def setup_db(_miniworld_domain):
    from miniworld.utils.db import drop_db, setup_db

    setup_db(_miniworld_domain)

    yield

    drop_db(_miniworld_domain)


@pytest.fixture()
def email_adapter():
    from miniworld.notifications.channel.simulated import SimulatedEmailAdapter

    return SimulatedEmailAdapter()


@pytest.fixture()
def auth_provider():
    from miniworld.identity.auth.provider import StaticTokenAuthProvider

    return StaticTokenAuthProvider({"admin-token": "owner@miniworld.pk"})


@pytest.fixture()
def app_config():
    from miniworld.config import load_config

    return load_config({"PROTEAN_ENV": "test", "MINIWORLD_BASE_URL": "http://testserver"})


@pytest.fixture(autouse=True)
def run_around_tests(_miniworld_domain, email_adapter, auth_provider, app_config):
    """Push domain context and install services before each test, cleanup after."""
    from miniworld import services
    from miniworld.notifications.email.service import EmailService
    from miniworld.payments.gateway.jazzcash import JazzCashGateway
    from miniworld.settings.cache import SettingsCache

    services.install(
        settings_cache=SettingsCache(),
        email_service=EmailService(email_adapter, from_address=app_config.email_from),
        payment_gateway=JazzCashGateway(app_config.jazzcash),
        auth_provider=auth_provider,
    )

    ctx = _miniworld_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
    services.reset()
