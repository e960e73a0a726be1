# =============================================================================
# Welcome.py — Daily shortage report form
# Physician & service | Catalog search | Free-text capture | Submit
# =============================================================================
from __future__ import annotations
import html

import streamlit as st

from shortage_core.catalog import SERVICES
from shortage_core.config import load_settings
from shortage_core.errors import ErrorContext, ReportValidationError, handle_error, safe_execute
from shortage_core.logging import setup_logging
from shortage_core.models import Category, make_custom_item
from shortage_core.services import (
    SubmitOutcome,
    get_catalog,
    get_report_gateway,
    get_session_memory,
    get_sync_engine,
)
from shortage_core.state.session import get_draft, init_state, reset_form
from shortage_core.ui import apply_css, item_tag_html, render_header

# ============================================================================
# PAGE CONFIGURATION
# ============================================================================
st.set_page_config(
    page_title="Reporte de Faltantes",
    page_icon="🏥",
    layout="wide",
)

setup_logging()
apply_css()

settings = load_settings()
memory = get_session_memory()
gateway = get_report_gateway()
catalog = safe_execute(get_catalog, error_message="No se pudo cargar el catálogo de artículos.")
if catalog is None:
    st.stop()
get_sync_engine()  # background delivery of locally queued reports

init_state(memory.recall() or "")
draft = get_draft()


# ============================================================================
# CALLBACKS (run before the rerun, so they may reset widget state)
# ============================================================================
def _toggle_item(item_id: str):
    item = catalog.get(item_id)
    if item is not None:
        draft.toggle(item)
    st.session_state["search_term"] = ""


def _remove_item(item_id: str):
    draft.remove(item_id)


def _open_custom_panel():
    st.session_state["show_custom_input"] = True
    st.session_state["search_term"] = ""


def _add_custom_item():
    with ErrorContext("Agregando artículo libre"):
        item = make_custom_item(
            st.session_state.get("custom_description", ""),
            Category.parse(st.session_state.get("custom_category", Category.MEDICAMENTO.value)),
        )
        draft.add(item)
        st.session_state["custom_description"] = ""
        st.session_state["show_custom_input"] = False


def _submit_report():
    name = st.session_state.get("physician_name", "")
    service = st.session_state.get("service", "")

    try:
        report = draft.build(name, service)
    except ReportValidationError as e:
        handle_error(e, show_user_message=False)
        st.session_state["flash"] = ("error", e.message)
        return

    outcome = gateway.submit(report)
    memory.remember(name)

    if outcome is SubmitOutcome.REMOTE:
        st.session_state["flash"] = ("success", "✅ Reporte guardado en la nube correctamente.")
        reset_form()
    elif outcome is SubmitOutcome.LOCAL_FALLBACK:
        st.session_state["flash"] = (
            "warning",
            "⚠️ El reporte se guardó localmente (sin internet). Se sincronizará después.",
        )
    else:
        st.session_state["flash"] = ("error", "No fue posible guardar el reporte. Intente de nuevo.")


# ============================================================================
# HEADER
# ============================================================================
render_header(settings.hospital_name, "Abasto Pediátrico · Registro de Faltante")
st.write("Seleccione los artículos que presentan desabasto hoy.")

flash = st.session_state.pop("flash", None)
if flash:
    level, message = flash
    getattr(st, level)(message)

if gateway.pending_count:
    st.info(f"Reportes pendientes de sincronizar en este equipo: {gateway.pending_count}")

# ============================================================================
# PHYSICIAN & SERVICE
# ============================================================================
col1, col2 = st.columns(2)
with col1:
    st.text_input("Médico", key="physician_name")
with col2:
    st.selectbox(
        "Servicio",
        options=[""] + sorted(SERVICES),
        format_func=lambda s: s or "Selecciona...",
        key="service",
    )

# ============================================================================
# CATALOG SEARCH
# ============================================================================
st.text_input("Buscador de Insumos/Medicamentos", placeholder="Nombre o Clave...", key="search_term")

term = st.session_state.get("search_term", "")
if term:
    for item in catalog.search(term):
        c1, c2, c3 = st.columns([6, 2, 1])
        c1.markdown(f"**{item.description}**  \n`{item.code}` · {item.presentation}")
        c2.caption(item.category.value)
        c3.button(
            "Quitar" if item in draft else "Agregar",
            key=f"pick_{item.id}",
            on_click=_toggle_item,
            args=(item.id,),
        )
    st.button("¿No aparece? Capturar opción libre", on_click=_open_custom_panel)

# ============================================================================
# FREE-TEXT ITEM
# ============================================================================
if st.session_state.get("show_custom_input"):
    with st.container(border=True):
        st.markdown("**Captura Manual de Faltante**")
        c1, c2, c3 = st.columns([4, 2, 1])
        c1.text_input("Descripción del artículo", key="custom_description")
        c2.selectbox("Categoría", [c.value for c in Category], key="custom_category")
        c3.button("Añadir", on_click=_add_custom_item)

# ============================================================================
# SELECTED ITEMS
# ============================================================================
st.subheader(f"Seleccionados ({len(draft)})")
if not len(draft):
    st.caption("No hay artículos seleccionados")
for item in draft.items:
    c1, c2 = st.columns([8, 1])
    c1.markdown(
        f"**{html.escape(item.description)}**  \n`{item.code}` {item_tag_html(item.display_tag())}",
        unsafe_allow_html=True,
    )
    c2.button("🗑️", key=f"remove_{item.id}", on_click=_remove_item, args=(item.id,))

st.button(
    "Enviar Reporte al Consolidado",
    type="primary",
    use_container_width=True,
    disabled=len(draft) == 0,
    on_click=_submit_report,
)
