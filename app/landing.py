import streamlit as st

from app.config import AppConfig
from app.whatsapp import build_whatsapp_url

PAGE_HOME = "Início"
PAGE_BOOKING = "Agendamento"
PAGE_ADMIN = "Painel Administrativo"
PAGES = [PAGE_HOME, PAGE_BOOKING, PAGE_ADMIN]

SERVICES = [
    ("🔧", "Pequenos Reparos", "Reparos residenciais e comerciais com qualidade"),
    ("💡", "Instalações", "Instalações elétricas, hidráulicas e mais"),
    ("🛠️", "Manutenção Geral", "Manutenção preventiva e corretiva"),
]

ADVANTAGES = [
    "Profissional experiente e qualificado",
    "Orçamento sem compromisso",
    "Atendimento rápido e eficiente",
    "Preços justos e competitivos",
    "Garantia nos serviços executados",
    "Atendimento de segunda à sábado",
]


def go_to(page: str):
    st.session_state.page = page


def _cta_row(cfg: AppConfig, key: str):
    c1, c2 = st.columns(2)
    with c1:
        st.button(
            "📅 Solicitar Orçamento",
            key=f"cta_booking_{key}",
            on_click=go_to,
            args=(PAGE_BOOKING,),
            width="stretch",
        )
    with c2:
        st.link_button(
            "💬 WhatsApp Direto",
            build_whatsapp_url(cfg.business.whatsapp_number),
            width="stretch",
        )


def render_landing_page(cfg: AppConfig):
    business = cfg.business

    # --- Hero ---
    st.title(f"🔧 {business.name}")
    st.subheader(business.tagline)
    st.write(
        "Soluções práticas para sua casa e empresa. Reparos, instalações e "
        "manutenção geral com qualidade e confiança."
    )
    _cta_row(cfg, "hero")

    # --- Services ---
    st.divider()
    st.header("Nossos Serviços")
    for col, (icon, title, description) in zip(st.columns(len(SERVICES)), SERVICES):
        with col:
            with st.container(border=True):
                st.markdown(f"### {icon} {title}")
                st.caption(description)

    # --- Advantages ---
    st.divider()
    st.header(f"Por que escolher o {business.name}?")
    left, right = st.columns(2)
    half = (len(ADVANTAGES) + 1) // 2
    for col, items in ((left, ADVANTAGES[:half]), (right, ADVANTAGES[half:])):
        with col:
            for item in items:
                st.markdown(f"✅ {item}")

    # --- Final CTA ---
    st.divider()
    st.header("Precisa de um serviço?")
    st.write("Solicite seu orçamento agora mesmo e tenha a tranquilidade de um trabalho bem feito!")
    _cta_row(cfg, "footer")

    # --- Footer ---
    st.divider()
    st.caption(f"📞 {business.display_phone}")
    st.caption(f"🕗 Atendimento: {business.opening_hours}")
    st.button(PAGE_ADMIN, key="footer_admin", on_click=go_to, args=(PAGE_ADMIN,))
    if business.instagram_url:
        st.caption(f"Desenvolvido por [Delinx - co.]({business.instagram_url})")
