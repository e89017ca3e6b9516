"""FastAPI routes for the storefront: buyers, cart, orders, sellers, admin."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import current_principal, require_admin
from storefront.api.schemas import (
    AddAddressRequest,
    AddressIdResponse,
    AddressListResponse,
    AddressResponse,
    BuyerIdResponse,
    CartItemRequest,
    CartLineResponse,
    CartResponse,
    ListProductRequest,
    OrderListResponse,
    OrderResponse,
    PlacedOrderResponse,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    RegisterBuyerRequest,
    SellerActionRequest,
    SellerActionResponse,
    SellerApplicationRequest,
    SellerIdResponse,
    SellerOrderListResponse,
    SellerOrderResponse,
    SetStockRequest,
    StatusResponse,
    UpdateAddressRequest,
)
from storefront.buyer.addresses import AddAddress, RemoveAddress, UpdateAddress
from storefront.buyer.registration import RegisterBuyer, load_buyer
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItem, cart_for
from storefront.catalogue.management import ListProduct, SetStockLevel, products_for_seller
from storefront.checkout.checkout import PlaceOrder
from storefront.fulfillment.actions import ApplySellerAction
from storefront.fulfillment.listing import list_orders_for_seller
from storefront.order.order import Order
from storefront.seller.application import ApplyForSeller, ApproveSeller
from storefront.utils.processing import process

# ---------------------------------------------------------------------------
# Buyers
# ---------------------------------------------------------------------------
buyer_router = APIRouter(prefix="/buyers", tags=["buyers"])


@buyer_router.post("", status_code=201, response_model=BuyerIdResponse)
async def register_buyer(body: RegisterBuyerRequest, principal: str = Depends(current_principal)) -> BuyerIdResponse:
    buyer_id = process(RegisterBuyer(buyer_id=principal, **body.model_dump()))
    return BuyerIdResponse(buyer_id=buyer_id)


@buyer_router.get("/me/addresses", response_model=AddressListResponse)
async def list_addresses(principal: str = Depends(current_principal)) -> AddressListResponse:
    buyer = load_buyer(principal)
    return AddressListResponse(
        addresses=[AddressResponse.model_validate(a) for a in buyer.addresses_default_first()]
    )


@buyer_router.post("/me/addresses", status_code=201, response_model=AddressIdResponse)
async def add_address(body: AddAddressRequest, principal: str = Depends(current_principal)) -> AddressIdResponse:
    address_id = process(AddAddress(buyer_id=principal, **body.model_dump()))
    return AddressIdResponse(address_id=address_id)


@buyer_router.put("/me/addresses/{address_id}", response_model=StatusResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, principal: str = Depends(current_principal)
) -> StatusResponse:
    process(UpdateAddress(buyer_id=principal, address_id=address_id, **body.model_dump(exclude_none=True)))
    return StatusResponse()


@buyer_router.delete("/me/addresses/{address_id}", response_model=StatusResponse)
async def remove_address(address_id: str, principal: str = Depends(current_principal)) -> StatusResponse:
    process(RemoveAddress(buyer_id=principal, address_id=address_id))
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(buyer_id):
    cart = cart_for(buyer_id)
    if cart is None:
        return CartResponse()

    snapshot = cart.snapshot()
    lines = [
        CartLineResponse(
            product_id=str(product.id),
            name=product.name,
            quantity=quantity,
            unit_price=price,
            line_total=round(price * quantity, 2),
            available=product.available,
        )
        for product, quantity, price in snapshot
    ]
    return CartResponse(cart_id=str(cart.id), items=lines, estimated_total=cart.estimated_total)


@cart_router.get("", response_model=CartResponse)
async def get_cart(principal: str = Depends(current_principal)) -> CartResponse:
    return _cart_response(principal)


@cart_router.post("", response_model=CartResponse)
async def add_to_cart(body: CartItemRequest, principal: str = Depends(current_principal)) -> CartResponse:
    process(AddToCart(buyer_id=principal, product_id=body.product_id, quantity=body.quantity))
    return _cart_response(principal)


@cart_router.patch("", response_model=CartResponse)
async def update_cart_item(body: CartItemRequest, principal: str = Depends(current_principal)) -> CartResponse:
    process(UpdateCartItem(buyer_id=principal, product_id=body.product_id, quantity=body.quantity))
    return _cart_response(principal)


@cart_router.delete("/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: str, principal: str = Depends(current_principal)) -> CartResponse:
    process(RemoveFromCart(buyer_id=principal, product_id=product_id))
    return _cart_response(principal)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlacedOrderResponse)
async def place_order(body: PlaceOrderRequest, principal: str = Depends(current_principal)) -> PlacedOrderResponse:
    order = process(
        PlaceOrder(
            buyer_id=principal,
            address_id=body.address_id,
            payment_method=body.payment_method,
            notes=body.notes,
        )
    )
    return PlacedOrderResponse(order=OrderResponse.model_validate(order))


@order_router.get("", response_model=OrderListResponse)
async def list_orders(principal: str = Depends(current_principal)) -> OrderListResponse:
    orders = current_domain.repository_for(Order).for_buyer(principal)
    return OrderListResponse(orders=[OrderResponse.model_validate(o) for o in orders])


# ---------------------------------------------------------------------------
# Sellers
# ---------------------------------------------------------------------------
seller_router = APIRouter(prefix="/seller", tags=["seller"])


@seller_router.post("/apply", status_code=201, response_model=SellerIdResponse)
async def apply_for_seller(
    body: SellerApplicationRequest, principal: str = Depends(current_principal)
) -> SellerIdResponse:
    seller_id = process(
        ApplyForSeller(
            user_id=principal,
            shop_name=body.shop_name,
            gst_number=body.gst_number,
            address=json.dumps(body.address.model_dump()),
            documents=json.dumps(body.documents.model_dump()),
        )
    )
    return SellerIdResponse(seller_id=seller_id)


@seller_router.get("/products", response_model=ProductListResponse)
async def list_seller_products(principal: str = Depends(current_principal)) -> ProductListResponse:
    products = products_for_seller(principal)
    return ProductListResponse(products=[ProductResponse.model_validate(p) for p in products])


@seller_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def list_product(body: ListProductRequest, principal: str = Depends(current_principal)) -> ProductIdResponse:
    product_id = process(ListProduct(seller_id=principal, **body.model_dump()))
    return ProductIdResponse(product_id=product_id)


@seller_router.patch("/products", response_model=ProductIdResponse)
async def set_stock_level(body: SetStockRequest, principal: str = Depends(current_principal)) -> ProductIdResponse:
    product_id = process(SetStockLevel(seller_id=principal, product_id=body.product_id, stock=body.stock))
    return ProductIdResponse(product_id=product_id)


@seller_router.get("/orders", response_model=SellerOrderListResponse)
async def list_seller_orders(principal: str = Depends(current_principal)) -> SellerOrderListResponse:
    views = list_orders_for_seller(principal)
    return SellerOrderListResponse(orders=[SellerOrderResponse.model_validate(v) for v in views])


@seller_router.patch("/orders", response_model=SellerActionResponse)
async def apply_seller_action(
    body: SellerActionRequest, principal: str = Depends(current_principal)
) -> SellerActionResponse:
    order, message = process(ApplySellerAction(seller_id=principal, order_id=body.order_id, action=body.action))
    return SellerActionResponse(message=message, order=OrderResponse.model_validate(order))


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.put("/sellers/{seller_id}/approve", response_model=SellerIdResponse)
async def approve_seller(seller_id: str, principal: str = Depends(current_principal)) -> SellerIdResponse:
    require_admin(principal)
    process(ApproveSeller(seller_id=seller_id))
    return SellerIdResponse(seller_id=seller_id)
