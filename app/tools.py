from typing import Any, Dict, Iterable, List, Optional
from collections import Counter
import io

import pandas as pd

from app.logging_config import get_logger
from db.models import STATUS_OPTIONS, AgendamentoInsert

logger = get_logger(__name__)


def error_message(exc: Exception) -> str:
    # postgrest APIError carries .message / .details, storage errors only .message
    for attr in ("message", "details"):
        value = getattr(exc, attr, None)
        if value:
            return str(value)
    return str(exc) or exc.__class__.__name__


# --- STORAGE TOOL -----------------------------------------------------------

def upload_photo(client, bucket: str, file_name: str, data: bytes,
                 content_type: str = "image/jpeg") -> Optional[str]:
    """Uploads a photo and returns its public URL, or None on failure."""
    try:
        storage = client.storage.from_(bucket)
        storage.upload(file_name, data, {"content-type": content_type})
        public_url = storage.get_public_url(file_name)
    except Exception as e:
        logger.error("photo_upload_failed", bucket=bucket, file=file_name, error=error_message(e))
        return None

    logger.info("photo_uploaded", bucket=bucket, file=file_name)
    return public_url


# --- BOOKING PERSISTENCE TOOL -----------------------------------------------

def insert_booking(client, table: str, payload: AgendamentoInsert) -> Dict[str, Any]:
    try:
        response = client.table(table).insert(dict(payload)).execute()
    except Exception as e:
        msg = error_message(e)
        logger.error("booking_insert_failed", table=table, error=msg)
        return {"success": False, "booking_id": None, "error": msg}

    booking_id = None
    if response.data:
        booking_id = response.data[0].get("id")

    logger.info("booking_inserted", table=table, booking_id=booking_id)
    return {"success": True, "booking_id": booking_id, "error": None}


# --- ADMIN TOOLS ------------------------------------------------------------

def fetch_bookings(client, table: str) -> Dict[str, Any]:
    """All booking records, newest request first."""
    try:
        response = (
            client.table(table)
            .select("*")
            .order("data_solicitacao", desc=True)
            .execute()
        )
    except Exception as e:
        msg = error_message(e)
        logger.error("booking_fetch_failed", table=table, error=msg)
        return {"success": False, "data": [], "error": msg}

    return {"success": True, "data": response.data or [], "error": None}


def update_booking_status(client, table: str, booking_id: str, status: str) -> Dict[str, Any]:
    if status not in STATUS_OPTIONS:
        return {"success": False, "error": f"Status inválido: {status}"}

    try:
        client.table(table).update({"status": status}).eq("id", booking_id).execute()
    except Exception as e:
        msg = error_message(e)
        logger.error("status_update_failed", booking_id=booking_id, status=status, error=msg)
        return {"success": False, "error": msg}

    logger.info("status_updated", booking_id=booking_id, status=status)
    return {"success": True, "error": None}


# --- LOCAL HELPERS ----------------------------------------------------------

def filter_by_status(records: Iterable[Dict[str, Any]], statuses: Iterable[str]) -> List[Dict[str, Any]]:
    wanted = set(statuses)
    records = list(records)
    if not wanted:
        return records
    return [r for r in records if r.get("status") in wanted]


def count_by_status(records: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    counts = Counter(r.get("status") for r in records)
    return {status: counts.get(status, 0) for status in STATUS_OPTIONS}


def replace_status(records: List[Dict[str, Any]], booking_id: str, status: str) -> List[Dict[str, Any]]:
    return [
        {**r, "status": status} if r.get("id") == booking_id else r
        for r in records
    ]


def bookings_to_csv(records: List[Dict[str, Any]]) -> bytes:
    buffer = io.StringIO()
    pd.DataFrame(records).to_csv(buffer, index=False)
    return buffer.getvalue().encode("utf-8")
