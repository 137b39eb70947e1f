from __future__ import annotations

import re
from typing import Any, Mapping, Optional
from urllib.parse import quote

from app.config import BusinessConfig
from app.formatting import format_date_br
from db.models import service_label

WHATSAPP_BASE_URL = "https://wa.me/"
COUNTRY_CODE = "55"


def only_digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def encode_text(text: str) -> str:
    # same unreserved set as JavaScript's encodeURIComponent
    return quote(text, safe="!~*'()")


def build_whatsapp_url(phone: str, text: Optional[str] = None) -> str:
    url = f"{WHATSAPP_BASE_URL}{only_digits(phone)}"
    if text:
        url += f"?text={encode_text(text)}"
    return url


def customer_phone(phone: str) -> str:
    """Digits of a Brazilian customer number, with the country code."""
    digits = only_digits(phone)
    # 10-11 digits is DDD + number; 12-13 already carries the 55 prefix
    if digits.startswith(COUNTRY_CODE) and len(digits) >= 12:
        return digits
    return COUNTRY_CODE + digits


def build_customer_message(record: Mapping[str, Any], business: BusinessConfig) -> str:
    return (
        f"Olá {record.get('nome_cliente', '')}! \n\n"
        f"Sobre sua solicitação de serviço:\n"
        f"*Tipo:* {service_label(record.get('tipo_servico'))}\n"
        f"*Data:* {format_date_br(record.get('data_preferencial'), business.timezone)}\n"
        f"*Endereço:* {record.get('endereco', '')}\n\n"
        f"Vou entrar em contato para combinarmos os detalhes.\n\n"
        f"{business.name} - {business.tagline}"
    )


def customer_whatsapp_url(record: Mapping[str, Any], business: BusinessConfig) -> str:
    return build_whatsapp_url(
        customer_phone(record.get("telefone", "")),
        build_customer_message(record, business),
    )
