from urllib.parse import unquote

import pytest

from app.config import BusinessConfig
from app.whatsapp import (
    build_customer_message,
    build_whatsapp_url,
    customer_phone,
    customer_whatsapp_url,
    encode_text,
)
from tests.conftest import booking_row


class TestEncoding:

    def test_matches_encode_uri_component(self):
        assert encode_text("Olá, *Pezão*!\n(ok) ~'a'") == (
            "Ol%C3%A1%2C%20*Pez%C3%A3o*!%0A(ok)%20~'a'"
        )

    def test_reserved_characters_escaped(self):
        assert encode_text("a&b=c?d/e#f") == "a%26b%3Dc%3Fd%2Fe%23f"


class TestUrls:

    def test_plain_link(self):
        assert build_whatsapp_url("5514998742493") == "https://wa.me/5514998742493"

    def test_link_strips_formatting(self):
        assert build_whatsapp_url("+55 (14) 99874-2493") == "https://wa.me/5514998742493"

    def test_link_with_text(self):
        url = build_whatsapp_url("5514998742493", "Olá mundo")
        assert url == "https://wa.me/5514998742493?text=Ol%C3%A1%20mundo"

    @pytest.mark.parametrize("phone,expected", [
        ("(14) 99999-0000", "5514999990000"),
        ("14 3333-4444", "551433334444"),
        ("+55 14 99999-0000", "5514999990000"),
        ("5514999990000", "5514999990000"),
    ])
    def test_customer_phone(self, phone, expected):
        assert customer_phone(phone) == expected


class TestCustomerMessage:

    def test_message_fields(self):
        record = booking_row("b1", tipo_servico="montagem-moveis",
                             data_preferencial="2025-03-10T08:00:00+00:00")
        text = build_customer_message(record, BusinessConfig())

        assert text.startswith("Olá Cliente b1!")
        assert "*Tipo:* Montagem de Móveis" in text
        assert "*Data:* 10/03/2025" in text
        assert "*Endereço:* Rua das Flores, 10, Centro" in text
        assert text.endswith("PEZÃO - Marido de Aluguel")

    def test_customer_url_targets_customer(self):
        record = booking_row("b1", telefone="(14) 98888-7777")
        url = customer_whatsapp_url(record, BusinessConfig())

        assert url.startswith("https://wa.me/5514988887777?text=")
        assert "Olá Cliente b1!" in unquote(url)
