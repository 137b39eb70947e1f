import streamlit as st
import pandas as pd
import plotly.express as px

from app.auth import current_admin, is_authenticated, sign_in, sign_out
from app.config import AppConfig
from app.formatting import format_date_br, format_datetime_br
from app.tools import (
    bookings_to_csv,
    count_by_status,
    fetch_bookings,
    filter_by_status,
    replace_status,
    update_booking_status,
)
from app.whatsapp import customer_whatsapp_url
from db.models import STATUS_OPTIONS, BookingStatus, service_label

STATUS_COLORS = {
    BookingStatus.NEW.value: "blue",
    BookingStatus.CONFIRMED.value: "green",
    BookingStatus.IN_PROGRESS.value: "orange",
    BookingStatus.DONE.value: "gray",
    BookingStatus.CANCELLED.value: "red",
}

BOOKINGS_KEY = "admin_bookings"
STATUS_KEY_PREFIX = "booking_status_"
STATUS_FILTER_KEY = "admin_status_filter"


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, "gray")


def status_badge(status: str) -> str:
    return f":{status_color(status)}-background[{status}]"


# --- Data -------------------------------------------------------------------

def _clear_status_widgets():
    for key in [k for k in st.session_state.keys() if str(k).startswith(STATUS_KEY_PREFIX)]:
        del st.session_state[key]


def load_bookings(cfg: AppConfig, client, force: bool = False):
    if force or st.session_state.get(BOOKINGS_KEY) is None:
        result = fetch_bookings(client, cfg.storage.bookings_table)
        if not result["success"]:
            st.error("Erro ao carregar agendamentos")
            st.toast("Erro ao carregar agendamentos", icon="⚠️")
            return []
        st.session_state[BOOKINGS_KEY] = result["data"]
        _clear_status_widgets()
    return st.session_state[BOOKINGS_KEY]


def _on_status_change(cfg: AppConfig, client, booking_id: str, previous: str):
    key = f"{STATUS_KEY_PREFIX}{booking_id}"
    new_status = st.session_state[key]
    if new_status == previous:
        return

    result = update_booking_status(client, cfg.storage.bookings_table, booking_id, new_status)
    if result["success"]:
        st.session_state[BOOKINGS_KEY] = replace_status(
            st.session_state[BOOKINGS_KEY], booking_id, new_status
        )
        st.toast("Status atualizado com sucesso!", icon="✅")
    else:
        # put the dropdown back on the stored value
        st.session_state[key] = previous
        st.session_state.admin_error = "Erro ao atualizar status"
        st.toast("Erro ao atualizar status", icon="⚠️")


# --- Sections ---------------------------------------------------------------

def _render_login(client):
    st.info("Entre com sua conta de administrador para ver os agendamentos.")
    with st.form("admin_login"):
        email = st.text_input("E-mail", key="admin_email")
        password = st.text_input("Senha", type="password", key="admin_password")
        submitted = st.form_submit_button("Entrar")

    if submitted:
        result = sign_in(client, email, password)
        if result["success"]:
            st.rerun()
        st.error(result["error"])


def _render_metrics(records):
    counts = count_by_status(records)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total de Agendamentos", len(records))
    col2.metric("Novos", counts[BookingStatus.NEW.value])
    col3.metric("Em Andamento", counts[BookingStatus.IN_PROGRESS.value])
    col4.metric("Finalizados", counts[BookingStatus.DONE.value])
    return counts


def _render_status_chart(counts):
    chart_df = pd.DataFrame({"Status": list(counts.keys()), "Agendamentos": list(counts.values())})
    fig = px.bar(
        chart_df,
        x="Status",
        y="Agendamentos",
        color="Status",
        color_discrete_map={s: status_color(s) for s in counts},
    )
    fig.update_layout(showlegend=False, height=280, margin=dict(l=0, r=0, t=10, b=0))
    st.plotly_chart(fig, width="stretch")


def _render_table(records, tz: str):
    df = pd.DataFrame(records)
    display_cols = [
        "data_solicitacao", "nome_cliente", "telefone", "tipo_servico",
        "data_preferencial", "status",
    ]
    final_cols = [c for c in display_cols if c in df.columns]
    df = df[final_cols].copy()
    if "data_solicitacao" in df.columns:
        df["data_solicitacao"] = df["data_solicitacao"].map(lambda v: format_datetime_br(v, tz))
    if "data_preferencial" in df.columns:
        df["data_preferencial"] = df["data_preferencial"].map(lambda v: format_date_br(v, tz))
    if "tipo_servico" in df.columns:
        df["tipo_servico"] = df["tipo_servico"].map(service_label)

    st.dataframe(
        df.rename(columns={
            "data_solicitacao": "Data Solicitação",
            "nome_cliente": "Cliente",
            "telefone": "Telefone",
            "tipo_servico": "Tipo de Serviço",
            "data_preferencial": "Data Preferencial",
            "status": "Status",
        }),
        width="stretch",
        hide_index=True,
    )


def _render_details(record, tz: str):
    c1, c2 = st.columns(2)
    c1.markdown(f"**Cliente:** {record.get('nome_cliente', '')}")
    c2.markdown(f"**Status:** {status_badge(record.get('status', ''))}")
    c1.markdown(f"**📞 Telefone:** {record.get('telefone', '')}")
    c2.markdown(f"**Tipo de Serviço:** {service_label(record.get('tipo_servico'))}")
    st.markdown(f"**📍 Endereço:** {record.get('endereco', '')}")
    c3, c4 = st.columns(2)
    c3.markdown(f"**Data Preferencial:** {format_date_br(record.get('data_preferencial'), tz)}")
    c4.markdown(f"**Data da Solicitação:** {format_datetime_br(record.get('data_solicitacao'), tz)}")
    if record.get("descricao_problema"):
        st.markdown("**Descrição do Problema**")
        st.text(record["descricao_problema"])
    if record.get("url_foto"):
        st.image(record["url_foto"], caption="Foto do problema")
        st.markdown(f"[🔗 Ver imagem completa]({record['url_foto']})")


def _render_booking_row(cfg: AppConfig, client, record):
    booking_id = record["id"]
    tz = cfg.business.timezone
    status = record.get("status") or BookingStatus.NEW.value
    key = f"{STATUS_KEY_PREFIX}{booking_id}"
    options = STATUS_OPTIONS if status in STATUS_OPTIONS else STATUS_OPTIONS + [status]
    if key not in st.session_state:
        st.session_state[key] = status

    with st.container(border=True):
        c1, c2, c3, c4 = st.columns([3, 2, 2, 2])
        with c1:
            st.markdown(f"**{record.get('nome_cliente', '')}**")
            st.caption(record.get("endereco", ""))
        with c2:
            st.markdown(service_label(record.get("tipo_servico")))
            st.caption(f"Preferência: {format_date_br(record.get('data_preferencial'), tz)}")
        with c3:
            st.selectbox(
                "Status",
                options=options,
                key=key,
                on_change=_on_status_change,
                args=(cfg, client, booking_id, status),
                label_visibility="collapsed",
            )
            st.caption(f"Solicitado em {format_datetime_br(record.get('data_solicitacao'), tz)}")
        with c4:
            st.link_button("💬 WhatsApp", customer_whatsapp_url(record, cfg.business),
                           width="stretch")
            if record.get("url_foto"):
                st.link_button("👁️ Foto", record["url_foto"], width="stretch")

        with st.expander("Detalhes do Agendamento"):
            _render_details(record, tz)


# --- Page -------------------------------------------------------------------

def render_admin_dashboard(cfg: AppConfig, client):
    st.title("📊 Painel Administrativo")
    st.caption(f"{cfg.business.name} - {cfg.business.tagline}")

    if not is_authenticated():
        _render_login(client)
        return

    with st.sidebar:
        admin = current_admin() or {}
        st.caption(f"Conectado como {admin.get('email', '')}")
        if st.button("🚪 Sair", key="admin_sign_out"):
            sign_out(client)
            st.session_state.pop(BOOKINGS_KEY, None)
            st.rerun()

    refresh = st.button("🔄 Atualizar", key="admin_refresh")
    with st.spinner("Carregando agendamentos..."):
        records = load_bookings(cfg, client, force=refresh)

    error = st.session_state.pop("admin_error", None)
    if error:
        st.error(error)

    # --- KPI Metrics ---
    counts = _render_metrics(records)

    if not records:
        st.info("📅 Nenhum agendamento encontrado")
        return

    _render_status_chart(counts)

    # --- Filters ---
    st.divider()
    st.subheader("Agendamentos")
    status_filter = st.multiselect(
        "Filtrar por Status",
        options=STATUS_OPTIONS,
        default=STATUS_OPTIONS,
        key=STATUS_FILTER_KEY,
    )
    filtered = filter_by_status(records, status_filter)

    # --- Main Data Table ---
    _render_table(filtered, cfg.business.timezone)

    # --- Export ---
    st.download_button(
        "📥 Baixar CSV",
        bookings_to_csv(filtered),
        "agendamentos.csv",
        "text/csv",
        key="download-csv",
    )

    # --- Actions: per-record status ---
    st.write("### Gerenciar")
    if not filtered:
        st.info("Nenhum agendamento com os status selecionados.")
    for record in filtered:
        _render_booking_row(cfg, client, record)
