"""Builds the storefront's outward-facing services from an ``AppConfig``.

Called once by each entry point (the web app, the CLI, the engine
runner) before any command is processed.
"""

from miniworld import services
from miniworld.config import AppConfig, load_config
from miniworld.identity.auth.provider import StaticTokenAuthProvider
from miniworld.notifications.channel.email_port import EmailPort
from miniworld.notifications.channel.resend import ResendEmailAdapter
from miniworld.notifications.channel.simulated import SimulatedEmailAdapter
from miniworld.notifications.email.service import EmailService
from miniworld.payments.gateway.jazzcash import JazzCashGateway
from miniworld.settings.cache import SettingsCache
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


def build_email_adapter(config: AppConfig) -> EmailPort:
    if config.simulate_email:
        return SimulatedEmailAdapter()
    return ResendEmailAdapter(
        api_key=config.resend_api_key,
        from_address=config.email_from,
        environment=config.environment,
    )


def install_services(config: AppConfig | None = None) -> AppConfig:
    """Construct every service for ``config`` and install it on the registry."""
    config = config or load_config()
    adapter = build_email_adapter(config)

    services.install(
        settings_cache=SettingsCache(),
        email_service=EmailService(adapter, from_address=config.email_from),
        payment_gateway=JazzCashGateway(config.jazzcash),
        auth_provider=StaticTokenAuthProvider(config.admin_tokens),
    )
    logger.info(
        "services_installed",
        environment=config.environment,
        email_adapter=type(adapter).__name__,
        jazzcash_sandbox=config.jazzcash.is_sandbox,
    )
    return config
