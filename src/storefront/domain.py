"""Storefront bounded context: Inventory, Cart, Orders and Seller Fulfillment.

Everything that has to change together at checkout (stock, carts, orders,
seller sub-orders) lives in this one domain so that a single unit of work
covers it.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
