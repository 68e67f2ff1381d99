"""
Archivos subidos (certificados médicos, fotos) servidos por bucket.
"""

from flask import Blueprint, abort, send_from_directory

from corpo_libero.services import settings_service

files_bp = Blueprint("files", __name__)


@files_bp.route("/<bucket>/<path:filename>", methods=["GET"])
def serve_file(bucket: str, filename: str):
    try:
        base_path = settings_service.get_bucket_path(bucket)
    except ValueError:
        abort(404)
    return send_from_directory(base_path, filename)
