from datetime import date, datetime, time

import streamlit as st

from app.booking_flow import submit_booking
from app.config import AppConfig
from app.whatsapp import build_whatsapp_url
from db.models import SERVICE_TYPES, service_label

IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp", "heic"]


def _init_form_state():
    if "booking_form_version" not in st.session_state:
        st.session_state.booking_form_version = 0
    if "last_booking" not in st.session_state:
        st.session_state.last_booking = None


def _render_last_booking():
    last = st.session_state.last_booking
    if not last:
        return
    if st.session_state.pop("booking_toast", False):
        st.toast("Agendamento enviado!", icon="✅")
    st.success(
        "Agendamento enviado! Finalize o contato pelo WhatsApp para receber seu orçamento."
    )
    st.link_button("💬 Abrir WhatsApp", last["whatsapp_url"], type="primary")


def render_booking_form(cfg: AppConfig, client):
    _init_form_state()
    business = cfg.business
    version = st.session_state.booking_form_version

    st.title(f"🔧 {business.name}")
    st.caption(business.tagline)
    st.header("Solicite seu Orçamento")
    st.write(
        "Pequenos reparos, instalações e manutenção geral. "
        "Preencha o formulário abaixo e receba seu orçamento via WhatsApp!"
    )

    _render_last_booking()

    # widget keys carry the form version: bumping it gives a blank form
    with st.form(key=f"booking_form_{version}"):
        st.subheader("📅 Formulário de Agendamento")
        nome = st.text_input(
            "Nome Completo", key=f"nome_cliente_{version}", placeholder="Seu nome completo"
        )
        telefone = st.text_input(
            "📞 Telefone/WhatsApp", key=f"telefone_{version}", placeholder="(14) 99999-9999"
        )
        endereco = st.text_input(
            "📍 Endereço", key=f"endereco_{version}", placeholder="Rua, número, bairro, cidade"
        )
        tipo = st.selectbox(
            "Tipo de Serviço",
            options=[value for value, _ in SERVICE_TYPES],
            format_func=service_label,
            index=None,
            placeholder="Selecione o tipo de serviço",
            key=f"tipo_servico_{version}",
        )
        c1, c2 = st.columns(2)
        with c1:
            dia = st.date_input(
                "Data Preferencial",
                value=None,
                min_value=date.today(),
                format="DD/MM/YYYY",
                key=f"data_preferencial_{version}",
            )
        with c2:
            hora = st.time_input("Horário", value=time(8, 0), key=f"horario_{version}")
        descricao = st.text_area(
            "Descrição do Problema",
            key=f"descricao_problema_{version}",
            placeholder="Descreva detalhadamente o problema ou serviço que você precisa...",
        )
        photo = st.file_uploader(
            "📷 Foto do Problema (Opcional)", type=IMAGE_TYPES, key=f"foto_{version}"
        )
        submitted = st.form_submit_button(
            "💬 Solicitar Agendamento e Orçamento", width="stretch"
        )

    if submitted:
        values = {
            "nome_cliente": nome,
            "telefone": telefone,
            "endereco": endereco,
            "tipo_servico": tipo,
            "data_preferencial": datetime.combine(dia, hora or time(8, 0)) if dia else None,
            "descricao_problema": descricao,
        }
        with st.spinner("Enviando..."):
            result = submit_booking(client, cfg, values, photo)

        if result["success"]:
            st.session_state.last_booking = result
            st.session_state.booking_toast = True
            st.session_state.booking_form_version = version + 1
            st.rerun()

        for message in result["errors"].values():
            st.error(message)
        if result["error"]:
            st.error(result["error"])
            st.toast("Erro ao enviar", icon="⚠️")

    st.divider()
    st.markdown(
        f"Ou entre em contato diretamente: "
        f"[{business.display_phone}]({build_whatsapp_url(business.whatsapp_number)})"
    )
