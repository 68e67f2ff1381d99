"""
Servicio de almacenamiento de archivos subidos (certificados médicos, fotos).

Los archivos se guardan en el bucket con nombre
`<user_id>_<timestamp>_<nombre seguro>` y se devuelve su URL pública.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Optional

from flask import url_for
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from corpo_libero.services import settings_service
from corpo_libero.services.logging import log_structured_event

logger = logging.getLogger(__name__)


def build_storage_filename(user_id: int, original_name: str, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    safe_name = secure_filename(original_name or "") or "archivo"
    return f"{user_id}_{timestamp_ms}_{safe_name}"


def public_url(bucket: str, filename: str) -> str:
    return url_for("files.serve_file", bucket=bucket, filename=filename)


def upload_file(file: Optional[FileStorage], bucket: str, user_id: int) -> Optional[str]:
    """
    Guarda el archivo en el bucket y devuelve la URL pública.

    Devuelve None si no hay archivo o si el guardado falla: el alta
    continúa sin el adjunto.
    """
    if file is None or not file.filename:
        return None

    try:
        base_path = settings_service.get_bucket_path(bucket)
        filename = settings_service.ensure_unique_filename(
            base_path, build_storage_filename(user_id, file.filename)
        )
        file.save(os.path.join(base_path, filename))
    except (OSError, ValueError):
        logger.exception("Error subiendo archivo al bucket %s", bucket)
        return None

    log_structured_event("file_uploaded", bucket=bucket, stored_name=filename, user_id=user_id)
    return public_url(bucket, filename)


def upload_medical_certificate(file: Optional[FileStorage], user_id: int) -> Optional[str]:
    bucket = settings_service.get_setting("MEDICAL_CERTIFICATES_BUCKET", "medical-certificates")
    return upload_file(file, bucket, user_id)


def upload_student_photo(file: Optional[FileStorage], user_id: int) -> Optional[str]:
    bucket = settings_service.get_setting("STUDENT_PHOTOS_BUCKET", "student-photos")
    return upload_file(file, bucket, user_id)
