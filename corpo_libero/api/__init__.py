"""
Paquete de API JSON usadas por los scripts de las páginas.

Contiene:
- api_dashboard_bp -> alertas del dashboard (polling y marca de revisada)
- api_students_bp  -> autocompletado de alumnas
"""

from .api_dashboard import api_dashboard_bp
from .api_students import api_students_bp

__all__ = [
    "api_dashboard_bp",
    "api_students_bp",
]
