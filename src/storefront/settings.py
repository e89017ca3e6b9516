"""Runtime settings for the storefront.

Framework configuration (databases, event processing) lives in
``pyproject.toml`` under ``[tool.protean]``; the values here are the
application's own knobs, overridable through environment variables.
"""

import os

# Cash on delivery is the only payment method on offer
SUPPORTED_PAYMENT_METHODS = ("cod",)
COD_PAYMENT_STATUS = "cod_pending"
DEFAULT_SHIPPING_METHOD = "standard"

# Request header carrying the authenticated principal id
PRINCIPAL_HEADER = os.getenv("STOREFRONT_PRINCIPAL_HEADER", "X-User-Id")

# Bounded retry for transient store failures
RETRY_ATTEMPTS = int(os.getenv("STOREFRONT_RETRY_ATTEMPTS", "3"))
RETRY_INITIAL_WAIT = float(os.getenv("STOREFRONT_RETRY_INITIAL_WAIT", "0.05"))
RETRY_MAX_WAIT = float(os.getenv("STOREFRONT_RETRY_MAX_WAIT", "1.0"))

# Principals allowed to approve seller applications
ADMIN_IDS = tuple(i.strip() for i in os.getenv("STOREFRONT_ADMIN_IDS", "admin").split(",") if i.strip())
