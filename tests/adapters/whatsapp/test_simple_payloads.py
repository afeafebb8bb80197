"""Testes para builders de mensagens simples.

Cobertura:
- Texto: telefone composto e validação antes de rede
- Mídia: obrigatoriedade e fileName padrão de áudio/vídeo
- Interativos: botões e lista com placeholders
- Erros: subtipo e categoria desconhecidos
"""

from __future__ import annotations

import pytest

from touchbase_pro.adapters.whatsapp.payload_builders import build_message_body, get_simple_builder
from touchbase_pro.domain.enums import SimpleMessageType
from touchbase_pro.domain.errors import ValidationError


class TestSimpleBuilderFactory:
    @pytest.mark.parametrize(
        ("message_type", "class_name"),
        [
            (SimpleMessageType.TEXT, "TextPayloadBuilder"),
            (SimpleMessageType.AUDIO, "MediaPayloadBuilder"),
            (SimpleMessageType.IMAGE, "MediaPayloadBuilder"),
            (SimpleMessageType.DOCUMENT, "MediaPayloadBuilder"),
            (SimpleMessageType.VIDEO, "MediaPayloadBuilder"),
            (SimpleMessageType.BUTTON, "ButtonPayloadBuilder"),
            (SimpleMessageType.LIST, "ListPayloadBuilder"),
        ],
    )
    def test_builder_per_subtype(self, message_type: SimpleMessageType, class_name: str) -> None:
        assert get_simple_builder(message_type).__class__.__name__ == class_name


class TestTextPayload:
    def test_text_uses_full_phone(self, simple_request) -> None:
        body = build_message_body(simple_request("text", message="Olá"), 0)
        assert body == {
            "fullPhoneNumber": "919876543210",
            "type": "Text",
            "data": {"message": "Olá"},
        }

    def test_empty_text_fails(self, simple_request) -> None:
        with pytest.raises(ValidationError) as exc_info:
            build_message_body(simple_request("text", message=""), 2)
        assert exc_info.value.message == "Message is required for text messages"
        assert exc_info.value.item_index == 2


class TestMediaPayload:
    def test_image(self, simple_request) -> None:
        request = simple_request("image", message="Legenda", media_url="https://cdn/x.png")
        body = build_message_body(request, 0)
        assert body == {
            "countryCode": "+91",
            "phoneNumber": "9876543210",
            "callbackData": "n8n_whatsapp_message",
            "type": "Image",
            "data": {"message": "Legenda", "mediaUrl": "https://cdn/x.png"},
        }

    def test_document_without_file_name(self, simple_request) -> None:
        request = simple_request(
            "document", message="Fatura", media_url="https://cdn/f.pdf", file_name="f.pdf"
        )
        body = build_message_body(request, 0)
        assert body["type"] == "Document"
        assert "fileName" not in body["data"]

    @pytest.mark.parametrize(("subtype", "default"), [("audio", "Audio"), ("video", "Video")])
    def test_default_file_name(self, simple_request, subtype: str, default: str) -> None:
        request = simple_request(subtype, message="m", media_url="https://cdn/m")
        assert build_message_body(request, 0)["data"]["fileName"] == default

    def test_file_name_given(self, simple_request) -> None:
        request = simple_request("video", message="m", media_url="https://cdn/m", file_name="clip.mp4")
        assert build_message_body(request, 0)["data"]["fileName"] == "clip.mp4"

    def test_media_without_url_fails(self, simple_request) -> None:
        with pytest.raises(ValidationError, match="Message and Media URL are required for image messages"):
            build_message_body(simple_request("image", message="m"), 0)


class TestInteractivePayload:
    def test_buttons_with_placeholders(self, simple_request) -> None:
        request = simple_request(
            "button",
            button_message={
                "buttonConfig": {
                    "messageText": "Escolha",
                    "buttons": {
                        "button": [
                            {"buttonId": "sim", "buttonTitle": "Sim"},
                            {},
                        ]
                    },
                }
            },
        )
        body = build_message_body(request, 0)
        assert body["type"] == "InteractiveButton"
        assert body["data"]["message"] == {
            "type": "button",
            "body": {"text": "Escolha"},
            "action": {
                "buttons": [
                    {"type": "reply", "reply": {"id": "sim", "title": "Sim"}},
                    {"type": "reply", "reply": {"id": "id2", "title": "Button 2"}},
                ]
            },
        }

    def test_buttons_without_config_fail(self, simple_request) -> None:
        with pytest.raises(ValidationError, match="Button configuration is required"):
            build_message_body(simple_request("button"), 0)

    def test_buttons_without_records_fail(self, simple_request) -> None:
        request = simple_request("button", button_message={"buttonConfig": {"buttons": {}}})
        with pytest.raises(ValidationError, match="At least one button is required"):
            build_message_body(request, 0)

    def test_list_with_defaults(self, simple_request) -> None:
        request = simple_request(
            "list",
            list_message={
                "listConfig": {
                    "sections": {"section": {"rows": {"row": [{"rowId": "r1"}]}}},
                }
            },
        )
        body = build_message_body(request, 0)
        assert body["type"] == "InteractiveList"
        assert body["data"]["message"] == {
            "type": "list",
            "body": {"text": "Please select an option"},
            "action": {
                "button": "View Options",
                "sections": [
                    {
                        "title": "Section",
                        "rows": [
                            {"id": "r1", "title": "Row Title", "description": "Row Description"}
                        ],
                    }
                ],
            },
        }

    def test_list_without_sections_fails(self, simple_request) -> None:
        request = simple_request("list", list_message={"listConfig": {"buttonText": "Ver"}})
        with pytest.raises(ValidationError, match="At least one section is required"):
            build_message_body(request, 0)


class TestUnsupportedKinds:
    def test_unknown_subtype(self, simple_request) -> None:
        with pytest.raises(ValidationError) as exc_info:
            build_message_body(simple_request("sticker", message="x"), 1)
        assert exc_info.value.message == "Unsupported message type: sticker"
        assert exc_info.value.item_index == 1

    def test_unknown_category(self, simple_request) -> None:
        request = simple_request("text", message="x").model_copy(update={"category": "broadcast"})
        with pytest.raises(ValidationError, match="Unsupported message category: broadcast"):
            build_message_body(request, 0)
