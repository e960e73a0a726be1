# =============================================================================
# shortage_core/errors/handlers.py
# Error Handling Utilities for the Shortage Log
# =============================================================================

from __future__ import annotations
from typing import Callable, Optional, TypeVar

import streamlit as st

from shortage_core.logging import get_logger
from .exceptions import ShortageLogError

logger = get_logger(__name__)

T = TypeVar("T")

# What the physician/admin sees for each error code when no custom text is given
USER_MESSAGES = {
    "REMOTE_001": "No hay conexión con la nube. Intente más tarde.",
    "NOT_FOUND_001": "El reporte ya no existe.",
    "LOCAL_001": "No se pudo escribir en el almacenamiento local del equipo.",
    "CONFIG_001": "La aplicación no está configurada correctamente.",
}


def user_message_for(error: Exception) -> str:
    """Spanish text for an error; validation messages are shown as raised."""
    if isinstance(error, ShortageLogError):
        return USER_MESSAGES.get(error.code, error.message)
    return "Ocurrió un error inesperado."


def handle_error(
    error: Exception,
    show_user_message: bool = True,
    user_message: Optional[str] = None,
) -> None:
    """
    Log an error and optionally show it on the page.

    Non-recoverable errors get a "contacte a soporte" hint. With
    ``debug_mode`` on in session state the error details are shown too.
    """
    if isinstance(error, ShortageLogError):
        logger.error(str(error), exc_info=error if not error.recoverable else False)
        recoverable = error.recoverable
        details = error.details
    else:
        logger.error(f"Unexpected error: {error}", exc_info=error)
        recoverable = True
        details = {"error_type": type(error).__name__, "error": str(error)}

    if not show_user_message:
        return

    message = user_message or user_message_for(error)
    if recoverable:
        st.error(message)
    else:
        st.error(f"{message} Contacte a soporte.")

    if details and st.session_state.get("debug_mode", False):
        with st.expander("Detalles del error", expanded=False):
            st.json(details)


def safe_execute(
    func: Callable[..., T],
    *args,
    default: Optional[T] = None,
    error_message: Optional[str] = None,
    **kwargs,
) -> Optional[T]:
    """
    Call ``func``; on failure report the error and return ``default``.

    Usage:
        catalog = safe_execute(get_catalog, error_message="No se pudo cargar el catálogo")
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        handle_error(e, user_message=error_message)
        return default


class ErrorContext:
    """
    Wraps a UI action: errors are reported on the page and, when
    ``recoverable`` (the default), swallowed so the rest of the page renders.

        with ErrorContext("Agregando artículo libre"):
            draft.add(make_custom_item(description, category))
    """

    def __init__(self, operation: str, recoverable: bool = True):
        self.operation = operation
        self.recoverable = recoverable

    def __enter__(self) -> ErrorContext:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            logger.debug(f"{self.operation}: ok")
            return False

        if isinstance(exc_val, ShortageLogError):
            handle_error(exc_val)
        else:
            handle_error(exc_val, user_message=f"Error durante: {self.operation}")
        return self.recoverable
