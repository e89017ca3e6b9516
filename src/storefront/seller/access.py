"""Authorization gate for seller operations."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import Forbidden
from storefront.seller.seller import Seller


def require_approved_seller(seller_id) -> Seller:
    """Return the seller, or raise ``Forbidden`` unless the admin approved them."""
    try:
        seller = current_domain.repository_for(Seller).get(str(seller_id))
    except ObjectNotFoundError as exc:
        raise Forbidden("Not an approved seller") from exc

    if not seller.is_approved_by_admin:
        raise Forbidden("Not an approved seller")
    return seller
