"""
Servicios para la configuración de la aplicación y rutas de almacenamiento.
"""

import os
from typing import List

from flask import current_app


def get_setting(key: str, default=None):
    return current_app.config.get(key, default)


def get_int_setting(key: str, default: int) -> int:
    raw = current_app.config.get(key, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def _resolve_path(config_value: str | None, default_parts: list[str]) -> str:
    if config_value:
        target_path = os.path.abspath(config_value)
    else:
        target_path = os.path.join(os.getcwd(), *default_parts)
    os.makedirs(target_path, exist_ok=True)
    return target_path


def ensure_unique_filename(base_dir: str, filename: str) -> str:
    base, ext = os.path.splitext(filename)
    candidate = filename
    counter = 1
    while os.path.exists(os.path.join(base_dir, candidate)):
        candidate = f"{base}_{counter}{ext}"
        counter += 1
    return candidate


def list_buckets() -> List[str]:
    """Buckets de archivos habilitados."""
    return [
        current_app.config.get("MEDICAL_CERTIFICATES_BUCKET", "medical-certificates"),
        current_app.config.get("STUDENT_PHOTOS_BUCKET", "student-photos"),
    ]


def get_storage_root() -> str:
    """Ruta absoluta de la raíz de almacenamiento."""
    return _resolve_path(current_app.config.get("STORAGE_ROOT"), ["storage"])


def get_bucket_path(bucket: str) -> str:
    """Ruta absoluta de un bucket; ValueError si el bucket no existe."""
    if bucket not in list_buckets():
        raise ValueError(f"Bucket desconocido: {bucket}")
    return _resolve_path(os.path.join(get_storage_root(), bucket), [])
