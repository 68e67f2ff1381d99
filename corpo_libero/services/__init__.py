"""
Paquete de servicios (lógica de negocio) de la aplicación.

Los servicios orquestan:
- repositorios (acceso a la base) a través de UnitOfWork
- validaciones y transacciones
- derivación de alertas y estadísticas del dashboard
- planillas Excel y archivos subidos
- logging estructurado
"""

from .alert_service import Alert, list_alerts, mark_alert_checked
from .reporting_service import (
    RENEWAL_SHARE_ESTIMATE,
    get_dashboard_stats,
    get_monthly_revenue,
    get_revenue_by_group,
    get_revenue_for_range,
    get_stat_detail,
)
from .cuota_service import create_cuota, export_cuotas, import_cuotas, list_cuotas
from .student_service import (
    create_student,
    get_payment_history,
    search_students,
    update_student,
)
from .registration_service import (
    create_annual_registration,
    list_registrations,
    register_student,
    renew_annual_registration,
)
from .pase_service import create_pase, list_pases
from .tournament_service import (
    add_participant,
    create_tournament,
    list_tournaments,
    update_participant_payment,
)
from .merchandising_service import (
    create_order,
    list_orders,
    toggle_delivered,
    toggle_fully_paid,
)
from .settings_service import get_setting
from .logging import log_structured_event

__all__ = [
    "Alert",
    "list_alerts",
    "mark_alert_checked",
    "RENEWAL_SHARE_ESTIMATE",
    "get_dashboard_stats",
    "get_monthly_revenue",
    "get_revenue_by_group",
    "get_revenue_for_range",
    "get_stat_detail",
    "create_cuota",
    "export_cuotas",
    "import_cuotas",
    "list_cuotas",
    "create_student",
    "get_payment_history",
    "search_students",
    "update_student",
    "create_annual_registration",
    "list_registrations",
    "register_student",
    "renew_annual_registration",
    "create_pase",
    "list_pases",
    "add_participant",
    "create_tournament",
    "list_tournaments",
    "update_participant_payment",
    "create_order",
    "list_orders",
    "toggle_delivered",
    "toggle_fully_paid",
    "get_setting",
    "log_structured_event",
]
