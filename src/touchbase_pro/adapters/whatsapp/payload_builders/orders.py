"""Extração de pedidos (order_details) e status de pedido para templates."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from touchbase_pro.adapters.whatsapp.fields import unwrap
from touchbase_pro.adapters.whatsapp.models import (
    OrderDescriptor,
    OrderItem,
    OrderStatus,
    OrderStatusDescriptor,
    PaymentExpiry,
    ShippingAddress,
)

DEFAULT_CURRENCY = "INR"


def _nested(record: dict[str, Any], group: str, key: str) -> dict[str, Any] | None:
    """Lê `record[group][key]` quando ambos existem e não estão vazios."""
    outer = record.get(group)
    if not isinstance(outer, Mapping):
        return None
    inner = outer.get(key)
    if not isinstance(inner, Mapping):
        return None
    return inner or None


def _build_order_item(item: dict[str, Any]) -> OrderItem:
    return OrderItem(
        name=item.get("itemName"),
        quantity=item.get("quantity"),
        amount=item.get("amount"),
        country_of_origin=item.get("countryOfOrigin"),
    )


def _build_shipping_address(addr: dict[str, Any]) -> ShippingAddress:
    return ShippingAddress(
        name=addr.get("name"),
        phone_number=addr.get("phoneNumber"),
        address=addr.get("address"),
        city=addr.get("city"),
        state=addr.get("state"),
        in_pin_code=addr.get("pinCode"),
        house_number=addr.get("houseNumber") or "",
        tower_number=addr.get("towerNumber") or "",
        building_name=addr.get("buildingName") or "",
        landmark_area=addr.get("landmarkArea") or "",
        country=addr.get("country"),
    )


def _apply_summary(order: OrderDescriptor, summary: dict[str, Any]) -> None:
    """Copia o resumo financeiro para o pedido, com defaults da API."""
    order.subtotal = summary.get("subtotal")
    order.discount = summary.get("discount") or 0
    order.tax = summary.get("tax") or 0
    order.shipping = summary.get("shipping") or 0
    order.total_amount = summary.get("totalAmount")
    order.currency = summary.get("currency") or DEFAULT_CURRENCY

    expiry = _nested(summary, "paymentExpiry", "expiry")
    if expiry:
        order.payment_option_expires_in = PaymentExpiry(
            value=expiry.get("value"),
            unit=expiry.get("unit"),
            expiration_message=expiry.get("expirationMessage") or "",
        )


def build_order(order: dict[str, Any]) -> OrderDescriptor:
    """Converte um registro `order` do formulário em OrderDescriptor."""
    descriptor = OrderDescriptor(
        reference_id=order.get("referenceId"),
        order_items=[
            _build_order_item(item)
            for item in unwrap(order.get("orderItems"), "item")
            if isinstance(item, Mapping)
        ],
    )

    address = _nested(order, "shippingAddress", "address")
    if address:
        descriptor.shipping_addresses = [_build_shipping_address(address)]

    summary = _nested(order, "orderSummary", "summary")
    if summary:
        _apply_summary(descriptor, summary)

    return descriptor


def build_order_details(raw_group: dict[str, Any]) -> list[OrderDescriptor] | None:
    """Extrai `orderDetails.order[]`; None quando não há pedidos."""
    orders = [order for order in unwrap(raw_group, "order") if isinstance(order, Mapping)]
    if not orders:
        return None
    return [build_order(order) for order in orders]


def build_order_status(raw_group: dict[str, Any]) -> OrderStatusDescriptor | None:
    """Extrai `orderStatus.status`; None quando não configurado."""
    status = raw_group.get("status") if isinstance(raw_group, Mapping) else None
    if not isinstance(status, Mapping) or not status:
        return None
    return OrderStatusDescriptor(
        reference_id=status.get("referenceId"),
        order=OrderStatus(
            status=status.get("status"),
            description=status.get("description") or "",
        ),
    )
