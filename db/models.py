# db/models.py
"""
Supabase does not require ORM model classes.
These TypedDicts mirror the tables created in the Supabase dashboard so
the rest of the app can annotate the rows it sends and receives.

Table: agendamentos
- id (uuid, PK)
- nome_cliente (text)
- telefone (text)
- endereco (text)
- tipo_servico (text)
- data_preferencial (timestamptz)
- descricao_problema (text, nullable)
- url_foto (text, nullable)
- status (text, default 'Novo')
- data_solicitacao (timestamptz, default now())
- created_at (timestamptz, default now())
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TypedDict, Union

Json = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]


class BookingStatus(str, Enum):
    NEW = "Novo"
    CONFIRMED = "Confirmado"
    IN_PROGRESS = "Em Andamento"
    DONE = "Finalizado"
    CANCELLED = "Cancelado"


STATUS_OPTIONS: List[str] = [s.value for s in BookingStatus]
DEFAULT_STATUS = BookingStatus.NEW.value

SERVICE_TYPES: List[Tuple[str, str]] = [
    ("reparo-eletrico", "Reparo Elétrico"),
    ("reparo-hidraulico", "Reparo Hidráulico"),
    ("instalacao-eletrica", "Instalação Elétrica"),
    ("instalacao-hidraulica", "Instalação Hidráulica"),
    ("pintura", "Pintura"),
    ("montagem-moveis", "Montagem de Móveis"),
    ("manutencao-geral", "Manutenção Geral"),
    ("outros", "Outros"),
]
SERVICE_LABELS: Dict[str, str] = dict(SERVICE_TYPES)


def service_label(value: Optional[str]) -> str:
    if not value:
        return ""
    return SERVICE_LABELS.get(value, value)

# ---------------------- agendamentos ----------------------
# Insert / Update shapes: required keys on a base class, columns with a
# database default (or nullable) on a total=False subclass.

class AgendamentoRow(TypedDict):
    id: str
    nome_cliente: str
    telefone: str
    endereco: str
    tipo_servico: str
    data_preferencial: str
    descricao_problema: Optional[str]
    url_foto: Optional[str]
    status: str
    data_solicitacao: str
    created_at: str


class _AgendamentoInsertBase(TypedDict):
    nome_cliente: str
    telefone: str
    endereco: str
    tipo_servico: str
    data_preferencial: str


class AgendamentoInsert(_AgendamentoInsertBase, total=False):
    id: str
    descricao_problema: Optional[str]
    url_foto: Optional[str]
    status: str
    data_solicitacao: str
    created_at: str


class AgendamentoUpdate(TypedDict, total=False):
    id: str
    nome_cliente: str
    telefone: str
    endereco: str
    tipo_servico: str
    data_preferencial: str
    descricao_problema: Optional[str]
    url_foto: Optional[str]
    status: str
    data_solicitacao: str
    created_at: str


# ---------------------- properties / bookings ----------------------

class PropertyRow(TypedDict):
    id: str
    owner_id: str
    title: str
    description: Optional[str]
    property_type: str
    address: str
    city: str
    state: str
    country: str
    latitude: Optional[float]
    longitude: Optional[float]
    bedrooms: int
    bathrooms: int
    max_guests: int
    amenities: Optional[List[str]]
    images: Optional[List[str]]
    price_per_night: float
    price_per_month: Optional[float]
    is_active: bool
    created_at: str
    updated_at: str


class _PropertyInsertBase(TypedDict):
    owner_id: str
    title: str
    address: str
    city: str
    state: str
    price_per_night: float


class PropertyInsert(_PropertyInsertBase, total=False):
    id: str
    description: Optional[str]
    property_type: str
    country: str
    latitude: Optional[float]
    longitude: Optional[float]
    bedrooms: int
    bathrooms: int
    max_guests: int
    amenities: Optional[List[str]]
    images: Optional[List[str]]
    price_per_month: Optional[float]
    is_active: bool
    created_at: str
    updated_at: str


class PropertyUpdate(TypedDict, total=False):
    id: str
    owner_id: str
    title: str
    description: Optional[str]
    property_type: str
    address: str
    city: str
    state: str
    country: str
    latitude: Optional[float]
    longitude: Optional[float]
    bedrooms: int
    bathrooms: int
    max_guests: int
    amenities: Optional[List[str]]
    images: Optional[List[str]]
    price_per_night: float
    price_per_month: Optional[float]
    is_active: bool
    created_at: str
    updated_at: str


class BookingRow(TypedDict):
    id: str
    property_id: str
    guest_id: str
    guest_name: str
    guest_email: str
    guest_phone: str
    check_in_date: str
    check_out_date: str
    total_nights: int
    total_amount: float
    special_requests: Optional[str]
    status: str
    created_at: str
    updated_at: str


class _BookingInsertBase(TypedDict):
    property_id: str
    guest_id: str
    guest_name: str
    guest_email: str
    guest_phone: str
    check_in_date: str
    check_out_date: str
    total_nights: int
    total_amount: float


class BookingInsert(_BookingInsertBase, total=False):
    id: str
    special_requests: Optional[str]
    status: str
    created_at: str
    updated_at: str


class BookingUpdate(TypedDict, total=False):
    id: str
    property_id: str
    guest_id: str
    guest_name: str
    guest_email: str
    guest_phone: str
    check_in_date: str
    check_out_date: str
    total_nights: int
    total_amount: float
    special_requests: Optional[str]
    status: str
    created_at: str
    updated_at: str


class PropertyAvailabilityRow(TypedDict):
    id: str
    property_id: str
    date: str
    is_available: bool
    price_override: Optional[float]
    created_at: str


class _PropertyAvailabilityInsertBase(TypedDict):
    property_id: str
    date: str


class PropertyAvailabilityInsert(_PropertyAvailabilityInsertBase, total=False):
    id: str
    is_available: bool
    price_override: Optional[float]
    created_at: str


class PropertyAvailabilityUpdate(TypedDict, total=False):
    id: str
    property_id: str
    date: str
    is_available: bool
    price_override: Optional[float]
    created_at: str


# ---------------------- customers ----------------------

class AddressRow(TypedDict):
    id: str
    user_id: str
    type: str
    full_name: str
    street_address: str
    city: str
    state: str
    postal_code: str
    country: str
    is_default: Optional[bool]
    created_at: str


class _AddressInsertBase(TypedDict):
    user_id: str
    type: str
    full_name: str
    street_address: str
    city: str
    state: str
    postal_code: str


class AddressInsert(_AddressInsertBase, total=False):
    id: str
    country: str
    is_default: Optional[bool]
    created_at: str


class AddressUpdate(TypedDict, total=False):
    id: str
    user_id: str
    type: str
    full_name: str
    street_address: str
    city: str
    state: str
    postal_code: str
    country: str
    is_default: Optional[bool]
    created_at: str


class OrderRow(TypedDict):
    id: str
    user_id: Optional[str]
    items: Json
    billing_address: Optional[Json]
    shipping_address: Optional[Json]
    total_amount: float
    status: str
    created_at: str
    updated_at: str


class _OrderInsertBase(TypedDict):
    items: Json
    total_amount: float


class OrderInsert(_OrderInsertBase, total=False):
    id: str
    user_id: Optional[str]
    billing_address: Optional[Json]
    shipping_address: Optional[Json]
    status: str
    created_at: str
    updated_at: str


class OrderUpdate(TypedDict, total=False):
    id: str
    user_id: Optional[str]
    items: Json
    billing_address: Optional[Json]
    shipping_address: Optional[Json]
    total_amount: float
    status: str
    created_at: str
    updated_at: str


class ProfileRow(TypedDict):
    id: str
    user_id: str
    full_name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    avatar_url: Optional[str]
    created_at: str
    updated_at: str


class _ProfileInsertBase(TypedDict):
    user_id: str


class ProfileInsert(_ProfileInsertBase, total=False):
    id: str
    full_name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    avatar_url: Optional[str]
    created_at: str
    updated_at: str


class ProfileUpdate(TypedDict, total=False):
    id: str
    user_id: str
    full_name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    avatar_url: Optional[str]
    created_at: str
    updated_at: str


TABLES: Dict[str, type] = {
    "agendamentos": AgendamentoRow,
    "bookings": BookingRow,
    "properties": PropertyRow,
    "property_availability": PropertyAvailabilityRow,
    "addresses": AddressRow,
    "orders": OrderRow,
    "profiles": ProfileRow,
}

# table -> (Row, Insert, Update)
TABLE_SHAPES: Dict[str, Tuple[type, type, type]] = {
    "agendamentos": (AgendamentoRow, AgendamentoInsert, AgendamentoUpdate),
    "bookings": (BookingRow, BookingInsert, BookingUpdate),
    "properties": (PropertyRow, PropertyInsert, PropertyUpdate),
    "property_availability": (
        PropertyAvailabilityRow, PropertyAvailabilityInsert, PropertyAvailabilityUpdate,
    ),
    "addresses": (AddressRow, AddressInsert, AddressUpdate),
    "orders": (OrderRow, OrderInsert, OrderUpdate),
    "profiles": (ProfileRow, ProfileInsert, ProfileUpdate),
}

# (table, column) -> (referenced table, referenced column)
RELATIONSHIPS: Dict[tuple, tuple] = {
    ("bookings", "property_id"): ("properties", "id"),
    ("property_availability", "property_id"): ("properties", "id"),
}
