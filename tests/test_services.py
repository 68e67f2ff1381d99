from datetime import date, timedelta
from decimal import Decimal
from io import BytesIO

import pandas as pd
import pytest
from werkzeug.datastructures import FileStorage

from corpo_libero.extensions import db
from corpo_libero.models import Cuota, Pase, PaymentRecord, Student
from corpo_libero.services import (
    alert_service,
    cuota_service,
    merchandising_service,
    pase_service,
    registration_service,
    student_service,
    tournament_service,
)
from corpo_libero.services.dto import AnnualRegistrationData, RegistrationFormData, StudentFormData


# --- Cuotas -----------------------------------------------------------------

def test_create_cuota_sets_due_one_month_later(app, user_id):
    cuota = cuota_service.create_cuota(
        user_id, "Lucía", Decimal("25000"), date(2026, 1, 31), grupo="escuela", medio="efectivo"
    )

    assert cuota.estado == "pagado"
    assert cuota.vencimiento == date(2026, 2, 28)


@pytest.mark.parametrize(
    "alumna, monto, fecha, grupo",
    [
        ("", Decimal("1"), date(2026, 1, 1), "jardin"),
        ("Lucía", None, date(2026, 1, 1), "jardin"),
        ("Lucía", Decimal("1"), None, "jardin"),
        ("Lucía", Decimal("1"), date(2026, 1, 1), "adultos"),
    ],
)
def test_create_cuota_validation(app, user_id, alumna, monto, fecha, grupo):
    with pytest.raises(ValueError):
        cuota_service.create_cuota(user_id, alumna, monto, fecha, grupo=grupo)


def test_list_cuotas_newest_first_with_search(app, user_id):
    cuota_service.create_cuota(user_id, "Lucía Mendoza", Decimal("1"), date(2026, 1, 1))
    cuota_service.create_cuota(user_id, "Martina Silva", Decimal("2"), date(2026, 1, 2))

    assert [c.alumna for c in cuota_service.list_cuotas(user_id)] == ["Martina Silva", "Lucía Mendoza"]
    assert [c.alumna for c in cuota_service.list_cuotas(user_id, "lucía")] == ["Lucía Mendoza"]


def test_import_cuotas_inserts_valid_rows(app, user_id):
    output = BytesIO()
    pd.DataFrame(
        [["Ana", "Jardin", 1000], ["", "jardin", 1000]], columns=["Alumna", "Grupo", "Monto"]
    ).to_excel(output, index=False, engine="openpyxl")

    count = cuota_service.import_cuotas(user_id, output.getvalue(), "cuotas.xlsx", today=date(2026, 1, 20))

    assert count == 1
    cuota = db.session.query(Cuota).filter_by(user_id=user_id).one()
    assert cuota.grupo == "jardin"
    assert cuota.vencimiento == date(2026, 2, 19)


def test_export_cuotas_without_data(app, user_id):
    with pytest.raises(ValueError, match="No hay cuotas"):
        cuota_service.export_cuotas(user_id)


# --- Pases ------------------------------------------------------------------

def test_create_pase_links_student_and_year(app, user_id):
    student = Student(user_id=user_id, full_name="Lucía Mendoza")
    db.session.add(student)
    db.session.commit()

    pase = pase_service.create_pase(
        user_id, "Lucía Mendoza", "Club Sur", date(2025, 11, 3), Decimal("15000"), "efectivo"
    )

    assert pase.student_id == student.id
    assert pase.year == 2025
    assert pase_service.list_pases(user_id)[0].gimnasio_traspaso == "Club Sur"


def test_create_pase_requires_destination(app, user_id):
    with pytest.raises(ValueError):
        pase_service.create_pase(user_id, "Lucía", "", date(2025, 11, 3), Decimal("1"), "efectivo")


# --- Torneos ----------------------------------------------------------------

def test_parse_categories():
    assert tournament_service.parse_categories(" Nivel 1, ,Nivel 2 ") == ["Nivel 1", "Nivel 2"]


def test_create_tournament_requires_category(app, user_id):
    with pytest.raises(ValueError):
        tournament_service.create_tournament(user_id, "Copa", date(2026, 3, 1), "Club", [])


def test_add_partial_participant_sets_due_date(app, user_id):
    tournament = tournament_service.create_tournament(
        user_id, "Copa", date(2026, 3, 1), "Club", ["Nivel 1"]
    )
    today = date(2026, 1, 20)

    partial = tournament_service.add_participant(
        user_id, tournament.id, "Lucía", "Nivel 1", payment_status="partial",
        payment_amount=Decimal("5000"), amount_due=Decimal("15000"), today=today,
    )
    paid = tournament_service.add_participant(
        user_id, tournament.id, "Martina", "Nivel 1", payment_status="paid", today=today,
    )

    assert partial.due_date == today + timedelta(days=15)
    assert partial.remaining_amount == Decimal("10000")
    assert paid.due_date is None


def test_update_participant_payment_clears_due_date(app, user_id):
    tournament = tournament_service.create_tournament(user_id, "Copa", date(2026, 3, 1), "Club", ["Nivel 1"])
    participant = tournament_service.add_participant(
        user_id, tournament.id, "Lucía", "Nivel 1", payment_status="partial"
    )

    updated = tournament_service.update_participant_payment(
        user_id, participant.id, "paid", payment_amount=Decimal("15000"), payment_date=date(2026, 1, 25)
    )

    assert updated.payment_status == "paid"
    assert updated.due_date is None


def test_update_to_partial_with_amount_due_raises_alert(app, user_id):
    tournament = tournament_service.create_tournament(user_id, "Copa", date(2026, 3, 1), "Club", ["Nivel 1"])
    participant = tournament_service.add_participant(user_id, tournament.id, "Lucía", "Nivel 1")
    today = date(2026, 1, 20)

    updated = tournament_service.update_participant_payment(
        user_id, participant.id, "partial", payment_amount=Decimal("5000"),
        amount_due=Decimal("15000"), today=today,
    )

    assert updated.amount_due == Decimal("15000")
    assert updated.remaining_amount == Decimal("10000")
    alerts = alert_service.list_alerts(user_id, today)
    assert [a.id for a in alerts] == [f"torneo-{participant.id}"]
    assert alerts[0].amount == "$10000"


def test_update_without_amount_due_keeps_previous_value(app, user_id):
    tournament = tournament_service.create_tournament(user_id, "Copa", date(2026, 3, 1), "Club", ["Nivel 1"])
    participant = tournament_service.add_participant(
        user_id, tournament.id, "Lucía", "Nivel 1", amount_due=Decimal("15000")
    )

    updated = tournament_service.update_participant_payment(
        user_id, participant.id, "partial", payment_amount=Decimal("8000")
    )

    assert updated.amount_due == Decimal("15000")


def test_add_participant_to_missing_tournament(app, user_id):
    with pytest.raises(ValueError, match="Torneo no encontrado"):
        tournament_service.add_participant(user_id, 999, "Lucía", "Nivel 1")


# --- Merchandising ----------------------------------------------------------

def _order(user_id, **kwargs):
    params = dict(
        producto="Malla", alumna="Lucía", monto=Decimal("10000"), medio="efectivo",
        observacion_pago="completo", fecha=date(2026, 1, 5),
    )
    params.update(kwargs)
    return merchandising_service.create_order(user_id, **params)


def test_create_complete_order(app, user_id):
    order = _order(user_id)

    assert order.pago_completo is True
    assert order.monto_pagado == Decimal("10000")
    assert order.remaining_amount == Decimal("0")


def test_create_partial_order(app, user_id):
    order = _order(user_id, observacion_pago="parcial", monto_pagado=Decimal("4000"))

    assert order.pago_completo is False
    assert order.remaining_amount == Decimal("6000")


@pytest.mark.parametrize("paid", [None, Decimal("0"), Decimal("10000"), Decimal("12000")])
def test_partial_order_amount_must_be_between_zero_and_total(app, user_id, paid):
    with pytest.raises(ValueError):
        _order(user_id, observacion_pago="parcial", monto_pagado=paid)


def test_toggle_order_flags(app, user_id):
    order = _order(user_id)

    assert merchandising_service.toggle_delivered(user_id, order.id).entregado is True
    assert merchandising_service.toggle_fully_paid(user_id, order.id).pago_completo is False


# --- Inscripciones ----------------------------------------------------------

def test_register_student_derives_statuses(app, user_id):
    data = RegistrationFormData.from_form(
        {
            "full_name": "Lucía Mendoza",
            "birth_date": "2015-04-02",
            "dni": "50111222",
            "contact_name": "Mariana",
            "medical_certificate_date": "2026-12-01",
        }
    )

    student = registration_service.register_student(user_id, data)

    assert student.school == "Mariana"
    assert student.medical_certificate_status == "active"
    assert student.federation_status == "inactive"


def test_register_student_requires_dni(app, user_id):
    data = RegistrationFormData.from_form({"full_name": "Lucía", "birth_date": "2015-04-02"})
    with pytest.raises(ValueError):
        registration_service.register_student(user_id, data)


def test_register_student_stores_uploaded_files(app, user_id):
    data = RegistrationFormData.from_form(
        {"full_name": "Lucía", "birth_date": "2015-04-02", "dni": "1", "payment_date": "2026-01-10"}
    )
    certificate = FileStorage(stream=BytesIO(b"%PDF-1.4"), filename="apto medico.pdf")

    with app.test_request_context():
        student = registration_service.register_student(user_id, data, certificate=certificate)

    assert student.federation_status == "active"
    assert student.medical_certificate_file.startswith("/files/medical-certificates/")
    assert student.medical_certificate_file.endswith("_apto_medico.pdf")
    assert student.photo is None


def test_renew_annual_registration(app, user_id):
    student = Student(user_id=user_id, full_name="Lucía", federation_status="inactive")
    db.session.add(student)
    db.session.commit()

    data = AnnualRegistrationData(
        approved=True, amount=Decimal("20000"), date=date(2026, 3, 1),
        payment_method="efectivo", student_id=student.id,
    )
    pase = registration_service.renew_annual_registration(user_id, data)

    assert pase.year == date.today().year
    refreshed = db.session.get(Student, student.id)
    assert refreshed.federation_status == "active"
    assert refreshed.federation_amount == Decimal("20000")


def test_renewal_requires_approval(app, user_id):
    data = AnnualRegistrationData(approved=False, amount=Decimal("1"), date=date(2026, 3, 1),
                                  payment_method="efectivo", student_id=1)
    with pytest.raises(ValueError, match="aprobación"):
        registration_service.renew_annual_registration(user_id, data)


def test_create_annual_registration(app, user_id):
    data = AnnualRegistrationData.from_form(
        {"approved": "on", "amount": "20000", "date": "2026-03-01", "payment_method": "tarjeta",
         "full_name": "Bea Ruiz", "level": "inicial"}
    )

    pase = registration_service.create_annual_registration(user_id, data)

    student = db.session.get(Student, pase.student_id)
    assert student.federation_status == "active"
    assert student.medical_certificate_status == "pending"
    assert db.session.query(Pase).count() == 1


# --- Alumnas ----------------------------------------------------------------

def test_student_create_update_and_search(app, user_id):
    student = student_service.create_student(user_id, StudentFormData(full_name="Lucía Mendoza"))
    student_service.update_student(
        user_id, student.id, StudentFormData(full_name="Lucía Mendoza", level="avanzado")
    )

    assert student_service.get_student(user_id, student.id).level == "avanzado"
    assert [s.id for s in student_service.search_students(user_id, "mendo")] == [student.id]
    assert student_service.search_students(user_id, "  ") == []


def test_student_invalid_status(app, user_id):
    with pytest.raises(ValueError):
        student_service.create_student(
            user_id, StudentFormData(full_name="Lucía", federation_status="suspendida")
        )


def test_payment_history_summary(app, user_id):
    student = student_service.create_student(user_id, StudentFormData(full_name="Lucía"))
    db.session.add_all(
        [
            PaymentRecord(user_id=user_id, student_id=student.id, date=date(2026, 1, 1),
                          amount=Decimal("25000"), concept="Cuota enero",
                          payment_method="efectivo", status="paid"),
            PaymentRecord(user_id=user_id, student_id=student.id, date=date(2026, 2, 1),
                          amount=Decimal("25000"), concept="Cuota febrero",
                          payment_method="efectivo", status="pending"),
        ]
    )
    db.session.commit()

    history = student_service.get_payment_history(user_id, student.id)

    assert history.paid_count == 1
    assert history.pending_count == 1
    assert history.paid_total == Decimal("25000")
    assert history.records[0].concept == "Cuota febrero"


def test_rows_are_scoped_by_user(app, user_id):
    cuota_service.create_cuota(user_id, "Lucía", Decimal("1"), date(2026, 1, 1))

    assert cuota_service.list_cuotas(user_id + 1) == []
