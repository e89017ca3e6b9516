"""Pydantic request/response schemas for the storefront API.

These are the external contracts; they are kept separate from the Protean
commands. Request bodies reject unknown fields.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RequestSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ResponseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Buyers
# ---------------------------------------------------------------------------
class RegisterBuyerRequest(RequestSchema):
    email: str = Field(min_length=3, max_length=255)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=20)


class BuyerIdResponse(BaseModel):
    buyer_id: str


class AddAddressRequest(RequestSchema):
    label: str | None = Field(default=None, max_length=20)
    street: str = Field(min_length=1, max_length=255)
    district: str | None = Field(default=None, max_length=100)
    city: str = Field(min_length=1, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)
    is_default: bool = False

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "label": "Home",
                    "street": "12 MG Road",
                    "district": "Central",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                    "zip_code": "560001",
                    "country": "India",
                    "is_default": True,
                }
            ]
        },
    )


class UpdateAddressRequest(RequestSchema):
    label: str | None = Field(default=None, max_length=20)
    street: str | None = Field(default=None, max_length=255)
    district: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)
    is_default: bool | None = None


class AddressResponse(ResponseSchema):
    id: str
    label: str | None = None
    street: str | None = None
    district: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    is_default: bool


class AddressIdResponse(BaseModel):
    address_id: str


class AddressListResponse(BaseModel):
    addresses: list[AddressResponse]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartItemRequest(RequestSchema):
    product_id: str = Field(min_length=1)
    quantity: int


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price: float
    line_total: float
    available: int


class CartResponse(BaseModel):
    cart_id: str | None = None
    items: list[CartLineResponse] = []
    estimated_total: float = 0.0


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(RequestSchema):
    address_id: str | None = None
    payment_method: str = "cod"
    notes: str | None = Field(default=None, max_length=1000)


class DeliveryAddressResponse(ResponseSchema):
    label: str | None = None
    street: str | None = None
    district: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class OrderItemResponse(ResponseSchema):
    product_id: str
    product_name: str
    seller_id: str
    quantity: int
    unit_price: float
    total_price: float


class OrderResponse(ResponseSchema):
    id: str
    buyer_id: str
    address_id: str
    delivery_address: DeliveryAddressResponse | None = None
    status: str
    payment_method: str
    payment_status: str
    shipping_method: str
    total_amount: float
    discount: float
    shipping_charge: float
    final_amount: float
    notes: str | None = None
    placed_at: datetime | None = None
    confirmed_at: datetime | None = None
    shipped_at: datetime | None = None
    cancelled_at: datetime | None = None
    items: list[OrderItemResponse]


class PlacedOrderResponse(BaseModel):
    order: OrderResponse


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


# ---------------------------------------------------------------------------
# Sellers
# ---------------------------------------------------------------------------
class PickupAddressSchema(RequestSchema):
    street: str = Field(min_length=1, max_length=255)
    district: str | None = Field(default=None, max_length=100)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    zip_code: str = Field(min_length=1, max_length=20)
    country: str = Field(default="India", max_length=100)


class SellerDocumentsSchema(RequestSchema):
    pan_card_front: str
    pan_card_back: str
    aadhar_card_front: str
    aadhar_card_back: str


class SellerApplicationRequest(RequestSchema):
    shop_name: str = Field(min_length=1, max_length=255)
    gst_number: str = Field(min_length=1, max_length=50)
    address: PickupAddressSchema
    documents: SellerDocumentsSchema


class SellerIdResponse(BaseModel):
    seller_id: str


class ListProductRequest(RequestSchema):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    sku: str | None = Field(default=None, max_length=50)
    price: float = Field(gt=0)
    stock: int = Field(ge=0)


class ProductIdResponse(BaseModel):
    product_id: str


class SetStockRequest(RequestSchema):
    product_id: str = Field(min_length=1)
    stock: int


class ProductResponse(ResponseSchema):
    id: str
    name: str
    description: str | None = None
    category: str | None = None
    sku: str | None = None
    price: float
    stock: int
    reserved: int
    available: int
    is_available: bool
    created_at: datetime | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


class BuyerContactResponse(ResponseSchema):
    name: str
    email: str | None = None
    phone: str | None = None


class SellerOrderResponse(ResponseSchema):
    order_id: str
    status: str
    order_status: str
    payment_method: str
    payment_status: str
    total_amount: float
    placed_at: datetime | None = None
    confirmed_at: datetime | None = None
    shipped_at: datetime | None = None
    cancelled_at: datetime | None = None
    buyer: BuyerContactResponse
    items: list[OrderItemResponse]


class SellerOrderListResponse(BaseModel):
    orders: list[SellerOrderResponse]


class SellerActionRequest(RequestSchema):
    order_id: str = Field(min_length=1)
    action: str


class SellerActionResponse(BaseModel):
    message: str
    order: OrderResponse
