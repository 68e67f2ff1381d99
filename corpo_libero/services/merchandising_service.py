"""
Servicios para los pedidos de merchandising.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from corpo_libero.models import MerchandisingOrder
from corpo_libero.services.logging import log_structured_event
from corpo_libero.services.unit_of_work import UnitOfWork

PRODUCT_CHOICES = ["Malla", "Campera", "Remera", "Short", "Bolso", "Buzo"]
SIZE_CHOICES = ["XS", "S", "M", "L", "XL", "6", "8", "10", "12", "14", "16"]
PAYMENT_NOTE_CHOICES = ["completo", "parcial"]


def list_orders(user_id: int) -> List[MerchandisingOrder]:
    with UnitOfWork() as uow:
        return uow.merchandising.list_for_user(user_id)


def create_order(
    user_id: int,
    producto: str,
    alumna: str,
    monto: Optional[Decimal],
    medio: str,
    observacion_pago: str,
    fecha: Optional[date],
    talle: str = "",
    monto_pagado: Optional[Decimal] = None,
    observacion: Optional[str] = None,
) -> MerchandisingOrder:
    producto = (producto or "").strip()
    alumna = (alumna or "").strip()
    medio = (medio or "").strip()
    if not producto or not alumna or monto is None or not medio or not observacion_pago or fecha is None:
        raise ValueError("Por favor completa todos los campos obligatorios")
    if observacion_pago not in PAYMENT_NOTE_CHOICES:
        raise ValueError("Observación de pago inválida")
    if monto <= 0:
        raise ValueError("El monto debe ser mayor a cero")

    if observacion_pago == "parcial":
        if monto_pagado is None or monto_pagado <= 0 or monto_pagado >= monto:
            raise ValueError("El monto pagado debe ser mayor a cero y menor al total")
        paid = monto_pagado
    else:
        paid = monto

    order = MerchandisingOrder(
        user_id=user_id,
        producto=producto,
        talle=(talle or "").strip(),
        alumna=alumna,
        monto=monto,
        monto_pagado=paid,
        medio=medio,
        observacion_pago=observacion_pago,
        observacion=observacion or None,
        fecha=fecha,
        entregado=False,
        pago_completo=observacion_pago == "completo",
        alerta_enviada=False,
    )
    with UnitOfWork() as uow:
        uow.merchandising.add(order)
        uow.commit()

    log_structured_event("merchandising_order_created", order_id=order.id, user_id=user_id)
    return order


def _toggle(user_id: int, order_id: int, attribute: str) -> MerchandisingOrder:
    with UnitOfWork() as uow:
        order = uow.merchandising.get_for_user(order_id, user_id)
        if order is None:
            raise ValueError("Pedido no encontrado")
        setattr(order, attribute, not getattr(order, attribute))
        uow.commit()

    log_structured_event(
        "merchandising_order_toggled",
        order_id=order_id,
        field=attribute,
        value=getattr(order, attribute),
    )
    return order


def toggle_delivered(user_id: int, order_id: int) -> MerchandisingOrder:
    return _toggle(user_id, order_id, "entregado")


def toggle_fully_paid(user_id: int, order_id: int) -> MerchandisingOrder:
    return _toggle(user_id, order_id, "pago_completo")
