# =============================================================================
# 01_Historico.py — Consolidated shortage history (admin)
# Search | Delete | Excel export | Local queue status
# =============================================================================
from __future__ import annotations
import html

import streamlit as st

from shortage_core.auth import logout_admin, require_admin_access
from shortage_core.logging import setup_logging
from shortage_core.services import (
    ExportService,
    export_filename,
    filter_reports,
    get_report_gateway,
    get_sync_engine,
)
from shortage_core.state.session import init_state
from shortage_core.ui import apply_css, item_tag_html, render_header

st.set_page_config(
    page_title="Histórico - Reporte de Faltantes",
    page_icon="📋",
    layout="wide",
)

setup_logging()
apply_css()

# ============================================================================
# AUTHENTICATION CHECK
# ============================================================================
require_admin_access()
init_state()

gateway = get_report_gateway()
sync_engine = get_sync_engine()


def _load_reports():
    st.session_state["history_reports"] = gateway.list()


def _delete_report(report_id: str):
    if gateway.remove(report_id):
        st.session_state["flash"] = ("success", "Reporte eliminado.")
    else:
        st.session_state["flash"] = ("error", "No se pudo eliminar el reporte.")
    _load_reports()


def _sync_pending():
    if sync_engine.state.is_syncing:
        st.session_state["flash"] = ("info", "Ya hay una sincronización en curso; actualice en unos segundos.")
        return
    if sync_engine.connection is not None:
        sync_engine.connection.check_connection()
    synced = sync_engine.sync_now()
    if synced and not gateway.pending_count:
        st.session_state["flash"] = ("success", "Reportes locales sincronizados.")
    elif sync_engine.state.is_syncing:
        st.session_state["flash"] = ("info", "Ya hay una sincronización en curso; actualice en unos segundos.")
    else:
        st.session_state["flash"] = ("warning", "Sin conexión o con errores; se reintentará más tarde.")
    _load_reports()


if st.session_state.get("history_reports") is None:
    _load_reports()

# ============================================================================
# HEADER & TOOLBAR
# ============================================================================
render_header("Panel de Control", "Consolidado de Faltantes")

flash = st.session_state.pop("flash", None)
if flash:
    level, message = flash
    getattr(st, level)(message)

reports = st.session_state["history_reports"] or []
term = st.session_state.get("history_search", "")
visible = filter_reports(term, reports)

c1, c2, c3 = st.columns([5, 1, 1])
c1.text_input("Buscar por servicio, médico o artículo...", key="history_search")
c2.button("🔄 Actualizar", on_click=_load_reports, use_container_width=True)
c3.button("Salir", on_click=logout_admin, use_container_width=True)

status = gateway.status()
if not status["remote_configured"]:
    st.error("La conexión con la nube no está configurada; los reportes solo se guardan en este equipo.")

pending = status["pending_count"]
if pending:
    p1, p2 = st.columns([5, 2])
    p1.warning(f"{pending} reporte(s) guardados localmente aún no llegan a la nube.")
    p2.button(
        "Sincronizar ahora",
        on_click=_sync_pending,
        disabled=sync_engine.state.is_syncing,
        use_container_width=True,
    )
    with st.expander("Ver reportes pendientes"):
        for report in gateway.pending():
            st.markdown(f"- {report.date} · **{report.service}** · {report.physician_name} ({report.item_count} artículos)")

last_success = sync_engine.state.last_success
if last_success:
    st.caption(f"Última sincronización: {last_success:%d/%m/%Y %H:%M}")

# ============================================================================
# EXPORT
# ============================================================================
export = ExportService().build_workbook(visible)
if export.success and export.data:
    st.download_button(
        "⬇️ Exportar Excel",
        data=export.data,
        file_name=export_filename(),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
elif not visible:
    st.caption("No hay datos para exportar.")
else:
    st.error(export.error or "No se pudo generar el archivo.")

# ============================================================================
# REPORT LIST
# ============================================================================
st.caption(f"{len(visible)} de {len(reports)} reportes")

for report in visible:
    with st.container(border=True):
        h1, h2 = st.columns([8, 1])
        h1.markdown(f"**{report.service}** · {report.physician_name} · {report.date}")
        h2.button("🗑️", key=f"delete_{report.id}", on_click=_delete_report, args=(report.id,))
        for item in report.items:
            tag = item_tag_html(item.display_tag(admin=True))
            st.markdown(f"- `{item.code}` {html.escape(item.description)} {tag}".rstrip(), unsafe_allow_html=True)
