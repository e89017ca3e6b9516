"""Storefront: cart, checkout and seller order fulfillment."""
