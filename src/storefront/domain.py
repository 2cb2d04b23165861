"""Domain initialization and configuration.

Products, users, carts, checkouts, orders and shipments are registered on a
single domain so that multi-aggregate sequences (checkout completion,
shipment delivery) run inside one Unit of Work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
