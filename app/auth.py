# app/auth.py

from typing import Any, Dict, Optional

import streamlit as st

from app.logging_config import get_logger
from app.tools import error_message

logger = get_logger(__name__)

SESSION_KEY = "admin_user"


def sign_in(client, email: str, password: str) -> Dict[str, Any]:
    if not email or not password:
        return {"success": False, "user": None, "error": "Informe e-mail e senha."}

    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.warning("admin_sign_in_failed", email=email, error=error_message(e))
        return {"success": False, "user": None, "error": "E-mail ou senha inválidos."}

    user = getattr(response, "user", None)
    if user is None:
        return {"success": False, "user": None, "error": "E-mail ou senha inválidos."}

    st.session_state[SESSION_KEY] = {"id": user.id, "email": user.email}
    logger.info("admin_signed_in", email=user.email)
    return {"success": True, "user": st.session_state[SESSION_KEY], "error": None}


def sign_out(client) -> None:
    try:
        client.auth.sign_out()
    except Exception as e:
        # the local session is dropped either way
        logger.warning("admin_sign_out_failed", error=error_message(e))
    st.session_state.pop(SESSION_KEY, None)


def current_admin() -> Optional[Dict[str, Any]]:
    return st.session_state.get(SESSION_KEY)


def is_authenticated() -> bool:
    return current_admin() is not None
