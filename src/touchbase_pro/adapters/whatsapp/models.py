"""Modelos de request WhatsApp (Interakt / TouchBasePro).

Responsabilidade:
- Representar os parâmetros lidos do formulário por item (MessageRequest)
- Representar o body de saída como registros explícitos por subtipo

Regra de campos esparsos: campos None NÃO são serializados. Ausente e vazio
são coisas diferentes para a API upstream, por isso toda serialização passa
por `to_wire()` (by_alias + exclude_none).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from touchbase_pro.adapters.whatsapp.fields import normalize_phone


class WireModel(BaseModel):
    """Base dos registros enviados à API (aliases = nomes do wire)."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serializa omitindo campos ausentes."""
        return self.model_dump(by_alias=True, exclude_none=True)


class MessageRequest(BaseModel):
    """Parâmetros de envio WhatsApp de um item (grupos repetíveis ainda crus)."""

    country_code: str = ""
    phone_number: str = ""
    category: str
    subtype: str | None = None
    message: str = ""
    media_url: str = ""
    file_name: str = ""
    button_message: dict[str, Any] = Field(default_factory=dict)
    list_message: dict[str, Any] = Field(default_factory=dict)
    template_name: str = ""
    template_language: str = "en"
    variables: list[dict[str, Any]] = Field(default_factory=list)
    header_values: dict[str, Any] = Field(default_factory=dict)
    template_file_name: str = ""
    button_values: dict[str, Any] = Field(default_factory=dict)
    carousel_cards: dict[str, Any] = Field(default_factory=dict)
    order_details: dict[str, Any] = Field(default_factory=dict)
    order_status: dict[str, Any] = Field(default_factory=dict)

    @property
    def destination_phone(self) -> str:
        """Telefone completo (código do país + número, só dígitos)."""
        return normalize_phone(self.country_code, self.phone_number)


class CardDescriptor(WireModel):
    """Card de carrossel (um por card, ordem preservada)."""

    header_values: list[Any] | None = Field(default=None, alias="headerValues")
    body_values: list[Any] | None = Field(default=None, alias="bodyValues")
    button_values: dict[str, list[Any]] | None = Field(default=None, alias="buttonValues")


class OrderStatus(WireModel):
    """Corpo de `order_status.order`."""

    status: Any = None
    description: Any = ""


class OrderStatusDescriptor(WireModel):
    """Status de pedido anexado ao template (`order_status`)."""

    reference_id: Any = None
    order: OrderStatus


class TemplateDescriptor(WireModel):
    """Objeto `template` do body."""

    name: str
    language_code: str = Field(alias="languageCode")
    body_values: list[Any] = Field(default_factory=list, alias="bodyValues")
    header_values: list[Any] | None = Field(default=None, alias="headerValues")
    file_name: str | None = Field(default=None, alias="fileName")
    button_values: dict[str, list[Any]] | None = Field(default=None, alias="buttonValues")
    carousel_cards: list[CardDescriptor] | None = Field(default=None, alias="carouselCards")
    order_status: OrderStatusDescriptor | None = None


class OrderItem(WireModel):
    """Item de pedido."""

    name: Any = None
    quantity: Any = None
    amount: Any = None
    country_of_origin: Any = None


class ShippingAddress(WireModel):
    """Endereço de entrega (partes opcionais como string vazia)."""

    name: Any = None
    phone_number: Any = None
    address: Any = None
    city: Any = None
    state: Any = None
    in_pin_code: Any = None
    house_number: Any = ""
    tower_number: Any = ""
    building_name: Any = ""
    landmark_area: Any = ""
    country: Any = None


class PaymentExpiry(WireModel):
    """Expiração da opção de pagamento."""

    value: Any = None
    unit: Any = None
    expiration_message: Any = ""


class OrderDescriptor(WireModel):
    """Registro de `order_details` (irmão de `template` no body)."""

    reference_id: Any = None
    order_items: list[OrderItem] = Field(default_factory=list)
    shipping_addresses: list[ShippingAddress] | None = None
    subtotal: Any = None
    discount: Any = None
    tax: Any = None
    shipping: Any = None
    total_amount: Any = None
    currency: Any = None
    payment_option_expires_in: PaymentExpiry | None = None


class InteraktMessageBody(WireModel):
    """Body completo de `POST /message/`."""

    full_phone_number: str | None = Field(default=None, alias="fullPhoneNumber")
    country_code: str | None = Field(default=None, alias="countryCode")
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    callback_data: str | None = Field(default=None, alias="callbackData")
    type: str
    data: dict[str, Any] | None = None
    template: TemplateDescriptor | None = None
    order_details: list[OrderDescriptor] | None = None
