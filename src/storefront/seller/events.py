"""Domain events for the Seller aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Seller")
class SellerApplicationSubmitted:
    """A user applied (or re-applied) to sell on the storefront."""

    __version__ = 1

    seller_id = Identifier(required=True)
    shop_name = String(required=True)
    submitted_at = DateTime(required=True)


@storefront.event(part_of="Seller")
class SellerApproved:
    """An admin approved a seller application."""

    __version__ = 1

    seller_id = Identifier(required=True)
    approved_at = DateTime(required=True)
