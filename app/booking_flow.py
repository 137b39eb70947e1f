from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple
import time

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.config import AppConfig, BusinessConfig
from app.logging_config import get_logger
from app.tools import insert_booking, upload_photo
from app.formatting import as_local, format_date_br, format_time_br
from app.whatsapp import build_whatsapp_url, only_digits
from db.models import AgendamentoInsert, service_label

logger = get_logger(__name__)

BOOKING_FIELDS = [
    "nome_cliente",
    "telefone",
    "endereco",
    "tipo_servico",
    "data_preferencial",
    "descricao_problema",
]

FIELD_MESSAGES = {
    "nome_cliente": "Nome deve ter pelo menos 2 caracteres",
    "telefone": "Telefone deve ter pelo menos 10 dígitos",
    "endereco": "Endereço deve ter pelo menos 5 caracteres",
    "tipo_servico": "Selecione um tipo de serviço",
    "data_preferencial": "Selecione uma data",
}
PAST_DATE_MESSAGE = "A data preferencial não pode estar no passado"

NOT_AN_IMAGE_MESSAGE = "Por favor, selecione apenas arquivos de imagem."
UPLOAD_ERROR_MESSAGE = "Não foi possível fazer upload da foto. Tente novamente."
SUBMIT_ERROR_MESSAGE = "Ocorreu um erro ao enviar seu agendamento. Tente novamente."


# ----------------- SCHEMA ------------------------

class BookingRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    nome_cliente: str = Field(min_length=2)
    telefone: str
    endereco: str = Field(min_length=5)
    tipo_servico: str = Field(min_length=1)
    data_preferencial: datetime
    descricao_problema: Optional[str] = None

    @field_validator("telefone")
    @classmethod
    def _phone_digits(cls, v: str) -> str:
        if len(only_digits(v)) < 10:
            raise ValueError(FIELD_MESSAGES["telefone"])
        return v

    @field_validator("data_preferencial")
    @classmethod
    def _not_in_past(cls, v: datetime) -> datetime:
        if v.date() < date.today():
            raise ValueError(PAST_DATE_MESSAGE)
        return v

    def to_insert(self, photo_url: Optional[str] = None,
                  tz: Optional[str] = None) -> AgendamentoInsert:
        preferred = as_local(self.data_preferencial, tz) if tz else self.data_preferencial
        return {
            "nome_cliente": self.nome_cliente,
            "telefone": self.telefone,
            "endereco": self.endereco,
            "tipo_servico": self.tipo_servico,
            "data_preferencial": preferred.isoformat(),
            "descricao_problema": self.descricao_problema or None,
            "url_foto": photo_url,
        }


def validate_booking_form(values: Dict[str, Any]) -> Tuple[Optional[BookingRequest], Dict[str, str]]:
    """Returns the parsed request, or None plus one message per invalid field."""
    try:
        return BookingRequest(**{f: values.get(f) for f in BOOKING_FIELDS}), {}
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "form"
            if field in errors:
                continue
            if err["type"] == "value_error" and "error" in err.get("ctx", {}):
                errors[field] = str(err["ctx"]["error"])
            else:
                errors[field] = FIELD_MESSAGES.get(field, err["msg"])
        return None, errors


# ----------------- PHOTO ------------------------

def is_image(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")


def build_photo_name(filename: str, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    ext = filename.rsplit(".", 1)[-1].lower()
    return f"{now_ms}.{ext}"


# ----------------- MESSAGE ------------------------

def build_request_message(request: BookingRequest, photo_url: Optional[str],
                          business: BusinessConfig) -> str:
    lines = [
        "*NOVA SOLICITAÇÃO DE SERVIÇO*",
        "",
        f"*Cliente:* {request.nome_cliente}",
        f"*Telefone:* {request.telefone}",
        f"*Endereço:* {request.endereco}",
        f"*Tipo de Serviço:* {service_label(request.tipo_servico)}",
        f"*Data Preferencial:* {format_date_br(request.data_preferencial, business.timezone)}",
        f"*Horário:* {format_time_br(request.data_preferencial, business.timezone)}",
        f"*Descrição:* {request.descricao_problema or 'Não informada'}",
    ]
    if photo_url:
        lines.append(f"*Foto:* {photo_url}")
    lines += ["", f"_Enviado pelo site {business.name} - {business.tagline}_"]
    return "\n".join(lines)


# ----------------- SUBMISSION ------------------------

def _result(success: bool, **kwargs: Any) -> Dict[str, Any]:
    result = {
        "success": success,
        "errors": {},
        "error": None,
        "booking_id": None,
        "photo_url": None,
        "whatsapp_url": None,
    }
    result.update(kwargs)
    return result


def submit_booking(client, cfg: AppConfig, values: Dict[str, Any], photo=None) -> Dict[str, Any]:
    """validate -> upload photo (optional) -> insert -> WhatsApp link.

    `photo` is anything with .name, .type and .getvalue(), e.g. a Streamlit
    UploadedFile.
    """
    request, errors = validate_booking_form(values)
    if errors:
        return _result(False, errors=errors)

    photo_url = None
    if photo is not None:
        if not is_image(getattr(photo, "type", None)):
            return _result(False, error=NOT_AN_IMAGE_MESSAGE)
        photo_url = upload_photo(
            client,
            cfg.storage.photo_bucket,
            build_photo_name(photo.name),
            photo.getvalue(),
            photo.type,
        )
        if photo_url is None:
            return _result(False, error=UPLOAD_ERROR_MESSAGE)

    payload = request.to_insert(photo_url, cfg.business.timezone)
    inserted = insert_booking(client, cfg.storage.bookings_table, payload)
    if not inserted["success"]:
        return _result(False, error=SUBMIT_ERROR_MESSAGE, photo_url=photo_url)

    message = build_request_message(request, photo_url, cfg.business)
    return _result(
        True,
        booking_id=inserted["booking_id"],
        photo_url=photo_url,
        whatsapp_url=build_whatsapp_url(cfg.business.whatsapp_number, message),
    )
