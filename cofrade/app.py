# app.py

from dotenv import load_dotenv

load_dotenv()  # ← Must precede any import depending on .env

import logging

import pandas as pd
import streamlit as st

from cofrade.ai import gemini
from cofrade.core.config import load_settings
from cofrade.core.errors import error_banner
from cofrade.core.models import (
    CITIES,
    DEFAULT_CITY,
    DEFAULT_DAY,
    HOLY_DAYS,
    ItineraryRequest,
    validate_request,
)
from cofrade.services import proxy_client
from cofrade.services.loading import run_with_messages
from cofrade.services.share import whatsapp_share_url

logger = logging.getLogger(__name__)
settings = load_settings()

# ──────────────────────────────────────────────────────────────────────────────
# 0. Streamlit configuration
# ──────────────────────────────────────────────────────────────────────────────
st.set_page_config(page_title="Guía Cofrade Pro", page_icon="📿", layout="centered")

# ──────────────────────────────────────────────────────────────────────────────
# 1. session_state initialisation (default values)
# ──────────────────────────────────────────────────────────────────────────────
defaults = {
    "result": None,    # ItineraryResponse
    "sources": [],     # [Source]
    "error": None,     # ErrorBanner
}
for k, v in defaults.items():
    st.session_state.setdefault(k, v)

# ──────────────────────────────────────────────────────────────────────────────
# 2. Header + input form
# ──────────────────────────────────────────────────────────────────────────────
st.markdown("# Guía Cofrade Pro")
st.caption("ANDALUCÍA 2025")

with st.form("itinerary_form"):
    col_city, col_day = st.columns(2)
    city_input = col_city.selectbox("📍 Ciudad", CITIES, index=CITIES.index(DEFAULT_CITY))
    day_input = col_day.selectbox("📅 Día", HOLY_DAYS, index=HOLY_DAYS.index(DEFAULT_DAY))
    vibe_input = st.text_area(
        "✨ ¿Qué buscas hoy?",
        placeholder="Ej: Silencio, cornetas y tambores, evitar bulla, ver palios...",
        height=140,
    )
    submitted = st.form_submit_button("🧭 Trazar mi ruta 2025", use_container_width=True)

# ──────────────────────────────────────────────────────────────────────────────
# 3. On form submission
# ──────────────────────────────────────────────────────────────────────────────
if submitted:
    st.session_state.result = None
    st.session_state.sources = []
    st.session_state.error = None

    req = ItineraryRequest(city=city_input, day=day_input, vibe=vibe_input)
    loading = st.empty()
    try:
        validate_request(req)

        if settings.proxy_mode:
            call = lambda: proxy_client.fetch_itinerary(req, settings)
        else:
            call = lambda: gemini.generate_itinerary(req, settings)

        loading.info("⏳ Trazando tu ruta…")
        result = run_with_messages(call, lambda msg: loading.info(f"⏳ {msg}"))

        st.session_state.result = result.response
        st.session_state.sources = result.sources
    except Exception as e:
        logger.error("Itinerary generation failed: %s", e, exc_info=True)
        st.session_state.error = error_banner(e, settings.debug)
    finally:
        loading.empty()

# ──────────────────────────────────────────────────────────────────────────────
# 4. Display error banner if needed
# ──────────────────────────────────────────────────────────────────────────────
banner = st.session_state.error
if banner:
    st.error(f"**{banner.title.upper()}**\n\n{banner.message}")
    if banner.detail:
        st.code(banner.detail)

# ──────────────────────────────────────────────────────────────────────────────
# 5. Itinerary timeline + sources + share
# ──────────────────────────────────────────────────────────────────────────────
plan = st.session_state.result
if plan:
    st.markdown("---")
    st.subheader(plan.plan_title)
    st.caption(f"{plan.city} · {plan.day}")

    view_choice = st.radio("Vista:", ["Línea de tiempo", "Tabla"], horizontal=True)

    if view_choice == "Línea de tiempo":
        for i, item in enumerate(plan.itinerary, start=1):
            with st.container(border=True):
                st.markdown(f"**{i}. `{item.hour}`**")
                st.markdown(f"### {item.brotherhood.upper()}")
                st.markdown(f"📍 {item.location}")
                st.markdown(f"> *\"{item.vibe_reason}\"*")
                if item.details:
                    st.caption(item.details)
    else:
        df_stops = pd.DataFrame(
            [
                {
                    "Hora": item.hour,
                    "Hermandad": item.brotherhood,
                    "Lugar": item.location,
                    "Por qué": item.vibe_reason,
                }
                for item in plan.itinerary
            ]
        )
        st.dataframe(df_stops, hide_index=True, use_container_width=True)
        st.download_button(
            "📥 Descargar (CSV)",
            df_stops.to_csv(index=False).encode("utf-8"),
            file_name=f"itinerario_{plan.city}_{plan.day}.csv".replace(" ", "_"),
            mime="text/csv",
        )

    if plan.extra_tips:
        st.info(plan.extra_tips)

    # 5.1. Grounding sources
    sources = st.session_state.sources
    if sources:
        st.markdown("---")
        st.caption("🔗 DATOS CONTRASTADOS CON FUENTES OFICIALES")
        st.markdown("  ·  ".join(s.to_markdown() for s in sources))

    # 5.2. Share
    st.markdown("---")
    st.link_button("📤 COMPARTIR PLAN COFRADE", whatsapp_share_url(plan), use_container_width=True)

st.markdown("---")
st.caption("Guía Cofrade Pro 2025")
