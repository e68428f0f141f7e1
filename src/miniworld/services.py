"""Application service registry.

Collaborators that talk to the outside world (email, the wallet gateway,
the auth provider) and the settings cache are constructed by the
composition root and installed here once at startup. Nothing is created
lazily: asking for a service that was never installed is an error.
"""

_services: dict[str, object] = {}

SETTINGS_CACHE = "settings_cache"
EMAIL_SERVICE = "email_service"
PAYMENT_GATEWAY = "payment_gateway"
AUTH_PROVIDER = "auth_provider"


class ServiceNotInstalled(RuntimeError):
    pass


def install(
    settings_cache=None,
    email_service=None,
    payment_gateway=None,
    auth_provider=None,
) -> None:
    """Install the given services, leaving the others untouched."""
    for name, service in (
        (SETTINGS_CACHE, settings_cache),
        (EMAIL_SERVICE, email_service),
        (PAYMENT_GATEWAY, payment_gateway),
        (AUTH_PROVIDER, auth_provider),
    ):
        if service is not None:
            _services[name] = service


def _get(name: str):
    try:
        return _services[name]
    except KeyError:
        raise ServiceNotInstalled(f"No {name.replace('_', ' ')} has been installed") from None


def settings_cache():
    return _get(SETTINGS_CACHE)


def email_service():
    return _get(EMAIL_SERVICE)


def payment_gateway():
    return _get(PAYMENT_GATEWAY)


def auth_provider():
    return _get(AUTH_PROVIDER)


def reset() -> None:
    """Uninstall every service (used between tests)."""
    _services.clear()
