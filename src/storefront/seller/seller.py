"""Seller aggregate: a seller application and its admin approval.

Only approved sellers may list products, change stock, or act on orders.
The seller's id is the id of the user who applied.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, ValueObject

from storefront.domain import storefront
from storefront.seller.events import SellerApplicationSubmitted, SellerApproved


@storefront.value_object(part_of="Seller")
class PickupAddress:
    """Where the seller ships from."""

    street = String(required=True, max_length=255)
    district = String(max_length=100)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.value_object(part_of="Seller")
class SellerDocuments:
    """Identity documents, stored as URLs returned by the blob store."""

    pan_card_front = String(required=True, max_length=500)
    pan_card_back = String(required=True, max_length=500)
    aadhar_card_front = String(required=True, max_length=500)
    aadhar_card_back = String(required=True, max_length=500)


@storefront.aggregate
class Seller:
    shop_name = String(required=True, max_length=255)
    gst_number = String(required=True, max_length=50)
    address = ValueObject(PickupAddress)
    documents = ValueObject(SellerDocuments)
    is_requested_for_seller = Boolean(default=False)
    is_approved_by_admin = Boolean(default=False)
    requested_at = DateTime()
    approved_at = DateTime()

    @classmethod
    def register(cls, user_id, shop_name, gst_number, address, documents):
        seller = cls(
            id=str(user_id),
            shop_name=shop_name.strip(),
            gst_number=gst_number.strip(),
        )
        seller.submit_application(shop_name, gst_number, address, documents)
        return seller

    def submit_application(self, shop_name, gst_number, address, documents):
        """Record (or refresh) the application details."""
        now = datetime.now(UTC)
        self.shop_name = shop_name.strip()
        self.gst_number = gst_number.strip()
        self.address = PickupAddress(**address)
        self.documents = SellerDocuments(**documents)
        self.is_requested_for_seller = True
        self.requested_at = now

        self.raise_(
            SellerApplicationSubmitted(
                seller_id=str(self.id),
                shop_name=self.shop_name,
                submitted_at=now,
            )
        )

    def approve(self):
        if not self.is_requested_for_seller:
            raise ValidationError({"seller": ["Seller has not applied"]})
        if self.is_approved_by_admin:
            return

        now = datetime.now(UTC)
        self.is_approved_by_admin = True
        self.approved_at = now
        self.raise_(SellerApproved(seller_id=str(self.id), approved_at=now))
