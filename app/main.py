from __future__ import annotations

import sys
import os

# --- Add project root to sys.path ---
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import streamlit as st

# IMPORTS
from app.config import ConfigError, load_config
from app.logging_config import configure_logging
from app.landing import PAGE_ADMIN, PAGE_BOOKING, PAGE_HOME, PAGES, render_landing_page
from app.booking_form import render_booking_form
from app.admin_dashboard import render_admin_dashboard
from db.database import get_supabase_client


def _init_app_state():
    if "page" not in st.session_state:
        st.session_state.page = PAGE_HOME


def main():
    st.set_page_config(
        page_title="PEZÃO - Marido de Aluguel",
        page_icon="🔧",
        layout="wide",
    )

    try:
        cfg = load_config()
    except (ConfigError, FileNotFoundError) as e:
        # FileNotFoundError: no secrets.toml at all
        st.error(f"Configuração inválida: {e}")
        st.stop()

    configure_logging(cfg.logging.level, cfg.logging.json)
    _init_app_state()

    # --- SIDEBAR NAVIGATION ---
    with st.sidebar:
        st.title(cfg.business.name)
        st.caption(cfg.business.tagline)
        menu = st.radio("Navegação", PAGES, key="page")

    client = get_supabase_client(cfg)

    if menu == PAGE_BOOKING:
        render_booking_form(cfg, client)
    elif menu == PAGE_ADMIN:
        render_admin_dashboard(cfg, client)
    else:
        render_landing_page(cfg)


if __name__ == "__main__":
    main()
