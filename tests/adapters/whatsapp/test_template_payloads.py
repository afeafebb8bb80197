"""Testes para TemplatePayloadBuilder.

Foco na regra de campos esparsos: chaves só aparecem quando há valor.
"""

from __future__ import annotations

import pytest

from touchbase_pro.adapters.whatsapp.payload_builders import build_message_body
from touchbase_pro.domain.errors import ValidationError

ORDER_GROUP = {
    "order": {
        "referenceId": "ref-1",
        "orderItems": {
            "item": [
                {"itemName": "Camiseta", "quantity": 2, "amount": 500, "countryOfOrigin": "IN"},
            ]
        },
        "shippingAddress": {
            "address": {
                "name": "Ana",
                "phoneNumber": "919876543210",
                "address": "Rua 1",
                "city": "Mumbai",
                "state": "MH",
                "pinCode": "400001",
                "country": "India",
            }
        },
        "orderSummary": {
            "summary": {
                "subtotal": 1000,
                "totalAmount": 1000,
                "paymentExpiry": {"expiry": {"value": 2, "unit": "hours"}},
            }
        },
    }
}


class TestBasicTemplate:
    def test_basic_template_has_exactly_three_keys(self, template_request) -> None:
        request = template_request("basic", variables=[{"value": "Ana"}, {"value": "42"}])
        body = build_message_body(request, 0)
        assert body == {
            "countryCode": "+91",
            "phoneNumber": "9876543210",
            "callbackData": "n8n_whatsapp_message",
            "type": "Template",
            "template": {
                "name": "hello_world",
                "languageCode": "en",
                "bodyValues": ["Ana", "42"],
            },
        }

    def test_without_variables_sends_empty_list(self, template_request) -> None:
        body = build_message_body(template_request("basic"), 0)
        assert body["template"]["bodyValues"] == []

    def test_given_language(self, template_request) -> None:
        body = build_message_body(template_request("basic", template_language="pt"), 0)
        assert body["template"]["languageCode"] == "pt"


class TestHeaderTemplates:
    @pytest.mark.parametrize("subtype", ["textHeader", "imageHeader"])
    def test_header_values(self, template_request, subtype: str) -> None:
        request = template_request(
            subtype, header_values={"headerValue": [{"value": "https://cdn/h.png"}]}
        )
        assert build_message_body(request, 0)["template"]["headerValues"] == ["https://cdn/h.png"]

    def test_empty_header_omitted(self, template_request) -> None:
        template = build_message_body(template_request("textHeader"), 0)["template"]
        assert "headerValues" not in template

    def test_document_header_with_file(self, template_request) -> None:
        request = template_request(
            "documentHeader",
            header_values={"headerValue": {"value": "https://cdn/doc.pdf"}},
            template_file_name="nota.pdf",
        )
        template = build_message_body(request, 0)["template"]
        assert template["headerValues"] == ["https://cdn/doc.pdf"]
        assert template["fileName"] == "nota.pdf"

    def test_document_header_without_file(self, template_request) -> None:
        template = build_message_body(template_request("documentHeader"), 0)["template"]
        assert "fileName" not in template


class TestButtonTemplates:
    @pytest.mark.parametrize("subtype", ["authentication", "dynamicCTA"])
    def test_button_values_by_index(self, template_request, subtype: str) -> None:
        request = template_request(
            subtype,
            button_values={
                "buttonValue": [
                    {"buttonIndex": "0", "values": {"value": [{"value": "123456"}]}},
                    {"buttonIndex": 1, "values": {"value": {"value": "promo"}}},
                ]
            },
        )
        template = build_message_body(request, 0)["template"]
        assert template["buttonValues"] == {"0": ["123456"], "1": ["promo"]}

    def test_without_buttons_omitted(self, template_request) -> None:
        template = build_message_body(template_request("authentication"), 0)["template"]
        assert "buttonValues" not in template


class TestOrderTemplates:
    def test_carousel_and_order_are_siblings(self, template_request) -> None:
        request = template_request(
            "orderCarousel",
            carousel_cards={
                "card": [
                    {
                        "cardHeaderValues": {"headerValue": {"value": "https://cdn/1.png"}},
                        "cardBodyValues": {"bodyValue": [{"value": "Item 1"}]},
                    },
                    {
                        "cardButtonValues": {
                            "buttonValue": {"buttonIndex": "0", "values": {"value": {"value": "x"}}}
                        }
                    },
                ]
            },
            order_details=ORDER_GROUP,
        )
        body = build_message_body(request, 0)

        assert body["template"]["carouselCards"] == [
            {"headerValues": ["https://cdn/1.png"], "bodyValues": ["Item 1"]},
            {"buttonValues": {"0": ["x"]}},
        ]
        assert "order_details" not in body["template"]
        assert body["order_details"][0]["reference_id"] == "ref-1"

    def test_full_order_with_defaults(self, template_request) -> None:
        request = template_request("orderSingleImage", order_details=ORDER_GROUP)
        order = build_message_body(request, 0)["order_details"][0]

        assert order["order_items"] == [
            {"name": "Camiseta", "quantity": 2, "amount": 500, "country_of_origin": "IN"}
        ]
        address = order["shipping_addresses"][0]
        assert address["in_pin_code"] == "400001"
        assert address["house_number"] == ""
        assert address["landmark_area"] == ""
        assert order["discount"] == 0
        assert order["tax"] == 0
        assert order["shipping"] == 0
        assert order["currency"] == "INR"
        assert order["total_amount"] == 1000
        assert order["payment_option_expires_in"] == {
            "value": 2,
            "unit": "hours",
            "expiration_message": "",
        }

    def test_order_without_summary_omits_keys(self, template_request) -> None:
        request = template_request(
            "orderSingleImage",
            order_details={"order": {"referenceId": "ref-2"}},
        )
        order = build_message_body(request, 0)["order_details"][0]
        assert order == {"reference_id": "ref-2", "order_items": []}

    def test_single_image_without_order(self, template_request) -> None:
        body = build_message_body(template_request("orderSingleImage"), 0)
        assert "order_details" not in body

    def test_order_status(self, template_request) -> None:
        request = template_request(
            "orderStatus",
            order_status={"status": {"referenceId": "ref-9", "status": "shipped"}},
        )
        template = build_message_body(request, 0)["template"]
        assert template["order_status"] == {
            "reference_id": "ref-9",
            "order": {"status": "shipped", "description": ""},
        }

    def test_missing_order_status(self, template_request) -> None:
        template = build_message_body(template_request("orderStatus"), 0)["template"]
        assert "order_status" not in template


class TestTemplateErrors:
    def test_unknown_subtype(self, template_request) -> None:
        with pytest.raises(ValidationError) as exc_info:
            build_message_body(template_request("unknownKind"), 3)
        assert exc_info.value.message == "Unsupported template type: unknownKind"
        assert exc_info.value.item_index == 3
        assert "[item 3]" in str(exc_info.value)

    def test_without_name(self, template_request) -> None:
        with pytest.raises(ValidationError, match="Template name is required"):
            build_message_body(template_request("basic", template_name=""), 0)

    def test_without_subtype(self, template_request) -> None:
        with pytest.raises(ValidationError, match="Template type is required"):
            build_message_body(template_request(None), 0)


class TestMalformedGroups:
    def test_scalar_order_status_is_omitted(self, template_request) -> None:
        request = template_request("orderStatus", order_status={"status": "shipped"})
        template = build_message_body(request, 0)["template"]
        assert "order_status" not in template

    def test_scalar_button_records_are_skipped(self, template_request) -> None:
        request = template_request(
            "dynamicCTA",
            button_values={
                "buttonValue": ["0", {"buttonIndex": 1, "values": {"value": {"value": "x"}}}]
            },
        )
        template = build_message_body(request, 0)["template"]
        assert template["buttonValues"] == {"1": ["x"]}

    def test_scalar_cards_and_orders_are_skipped(self, template_request) -> None:
        request = template_request(
            "orderCarousel",
            carousel_cards={"card": ["oops", {"cardBodyValues": {"bodyValue": {"value": "A"}}}]},
            order_details={"order": ["oops"]},
        )
        body = build_message_body(request, 0)
        assert body["template"]["carouselCards"] == [{"bodyValues": ["A"]}]
        assert "order_details" not in body

    def test_scalar_nested_address_is_ignored(self, template_request) -> None:
        request = template_request(
            "orderSingleImage",
            order_details={
                "order": {"referenceId": "ref-3", "shippingAddress": {"address": "Rua 1"}}
            },
        )
        order = build_message_body(request, 0)["order_details"][0]
        assert "shipping_addresses" not in order
