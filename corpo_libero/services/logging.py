"""
Eventos de negocio en el log JSON.

Cada evento sale por el logger ``corpo_libero.events`` con ``action`` y los
campos pasados; dentro de un request se agregan el usuario, el método y la
ruta, salvo que el servicio los pase explícitamente.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import g, has_request_context, request

from corpo_libero.extensions import STANDARD_RECORD_ATTRS

events_logger = logging.getLogger("corpo_libero.events")

# makeRecord rechaza también estas claves en `extra`
_RESERVED_KEYS = STANDARD_RECORD_ATTRS | {"message", "asctime"}


def _request_fields() -> Dict[str, Any]:
    if not has_request_context():
        return {}
    fields: Dict[str, Any] = {"http_method": request.method, "path": request.path}
    user = getattr(g, "current_user", None)
    if user is not None:
        fields["user_id"] = user.user_id
    return fields


def _safe_key(key: str) -> str:
    return f"{key}_field" if key in _RESERVED_KEYS else key


def log_structured_event(
    action: str,
    *,
    message: Optional[str] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """
    Registra el evento `action` (ej. "cuota_created").

    Las claves que chocan con atributos de LogRecord (``filename``,
    ``module``...) se renombran con sufijo ``_field``.
    """
    payload: Dict[str, Any] = _request_fields()
    payload.update({_safe_key(key): value for key, value in fields.items()})
    payload["action"] = action

    log_method = getattr(events_logger, level.lower(), events_logger.info)
    try:
        log_method(message or f"Evento {action}", extra=payload)
    except Exception:
        # Un problema de logging no corta la operación
        events_logger.debug("No se pudo registrar el evento %s", action, exc_info=True)
