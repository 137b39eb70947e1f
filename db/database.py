# db/database.py

from typing import Optional

from supabase import create_client, Client
import streamlit as st

from app.config import AppConfig, load_config


def get_supabase_client(cfg: Optional[AppConfig] = None) -> Client:
    """
    Returns a cached Supabase client.
    One client per browser session, so the admin's auth session
    stays attached to the client that signed in.
    """

    if "supabase_client" not in st.session_state:
        if cfg is None:
            cfg = load_config()
        st.session_state.supabase_client = create_client(
            cfg.supabase.url, cfg.supabase.anon_key
        )

    return st.session_state.supabase_client
