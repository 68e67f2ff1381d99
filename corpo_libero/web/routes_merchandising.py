"""
Rutas de merchandising: pedidos, entrega y pago.
"""

import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import merchandising_service
from corpo_libero.services.cuota_service import METHOD_CHOICES
from corpo_libero.services.dto import parse_date, parse_decimal

logger = logging.getLogger(__name__)

merchandising_bp = Blueprint("merchandising", __name__)


@merchandising_bp.route("/", methods=["GET"])
@login_required
def list_view():
    orders = []
    try:
        orders = merchandising_service.list_orders(current_user_id())
    except Exception:
        logger.exception("Error cargando pedidos")
        flash("No se pudieron cargar los pedidos", "danger")
    return render_template(
        "merchandising/index.html",
        orders=orders,
        products=merchandising_service.PRODUCT_CHOICES,
        sizes=merchandising_service.SIZE_CHOICES,
        methods=METHOD_CHOICES,
    )


@merchandising_bp.route("/", methods=["POST"])
@login_required
def create_view():
    form = request.form
    try:
        merchandising_service.create_order(
            current_user_id(),
            producto=form.get("producto"),
            alumna=form.get("alumna"),
            monto=parse_decimal(form.get("monto")),
            medio=form.get("medio"),
            observacion_pago=form.get("observacion_pago"),
            fecha=parse_date(form.get("fecha")),
            talle=form.get("talle") or "",
            monto_pagado=parse_decimal(form.get("monto_pagado")),
            observacion=form.get("observacion"),
        )
        flash("Pedido creado con éxito", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error guardando pedido")
        flash("Hubo un problema al guardar el pedido", "danger")
    return redirect(url_for("merchandising.list_view"))


@merchandising_bp.route("/<int:order_id>/entregado", methods=["POST"])
@login_required
def toggle_delivered_view(order_id: int):
    try:
        merchandising_service.toggle_delivered(current_user_id(), order_id)
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error actualizando entrega del pedido %s", order_id)
        flash("No se pudo actualizar el pedido", "danger")
    return redirect(url_for("merchandising.list_view"))


@merchandising_bp.route("/<int:order_id>/pago", methods=["POST"])
@login_required
def toggle_paid_view(order_id: int):
    try:
        merchandising_service.toggle_fully_paid(current_user_id(), order_id)
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error actualizando pago del pedido %s", order_id)
        flash("No se pudo actualizar el pedido", "danger")
    return redirect(url_for("merchandising.list_view"))
