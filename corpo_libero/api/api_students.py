"""
API JSON de alumnas (autocompletado por nombre).
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import student_service

api_students_bp = Blueprint("api_students", __name__)


@api_students_bp.route("/search", methods=["GET"])
@login_required
def api_search_students():
    term = request.args.get("q", "")
    students = student_service.search_students(current_user_id(), term)

    payload = [
        {
            "id": s.id,
            "full_name": s.full_name,
            "level": s.level,
            "school": s.school,
        }
        for s in students
    ]
    return jsonify({"success": True, "message": "", "payload": payload})
