"""MiniWorld storefront domain.

A single bounded context covering the public catalogue, session carts,
checkout and orders, store settings, payment accounts and the wallet
gateway bridge, identity (customers and back-office admins) and email
notifications.
"""

from protean.domain import Domain

from miniworld.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
miniworld = Domain(name="miniworld")
