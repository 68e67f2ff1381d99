from datetime import date, timedelta
from decimal import Decimal
from io import BytesIO

import pandas as pd
import pytest

from corpo_libero.extensions import db
from corpo_libero.models import Cuota, MerchandisingOrder, Student, Tournament, TournamentParticipant
from corpo_libero.services import cuota_service, merchandising_service, tournament_service


@pytest.mark.parametrize(
    "path",
    ["/", "/dashboard", "/inscripciones/", "/cuotas/", "/alumnos/", "/torneos/", "/pases/", "/merchandising/"],
)
def test_pages_render(auth_client, path):
    response = auth_client.get(path)
    assert response.status_code == 200


def test_dashboard_detail_and_month(auth_client):
    response = auth_client.get("/dashboard?month=2026-01&detail=ingresos")

    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "Ingresos del mes" in body
    assert "estimación 70/30" in body


def test_unknown_page_renders_404(auth_client):
    response = auth_client.get("/no-existe")

    assert response.status_code == 404
    assert "/no-existe" in response.get_data(as_text=True)


def test_unknown_api_returns_json_404(client):
    response = client.get("/api/no-existe")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_healthcheck(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_alerts_api(auth_client, user_id):
    db.session.add(
        Cuota(user_id=user_id, alumna="Lucía", grupo="jardin", monto=Decimal("25000"),
              medio="efectivo", fecha_pago=date.today() - timedelta(days=40),
              vencimiento=date.today() - timedelta(days=10), estado="pendiente")
    )
    db.session.commit()

    payload = auth_client.get("/api/dashboard/alerts").get_json()

    assert payload["success"] is True
    assert payload["payload"][0]["title"] == "Cuota Vencida"
    assert payload["payload"][0]["amount"] == "$25000"
    assert payload["payload"][0]["urgent"] is True


def test_check_alert_api(auth_client, user_id):
    order = MerchandisingOrder(user_id=user_id, producto="Malla", alumna="Lucía",
                               monto=Decimal("10000"), medio="efectivo",
                               fecha=date(2026, 1, 5), pago_completo=False)
    db.session.add(order)
    db.session.commit()

    response = auth_client.post("/api/dashboard/alerts/check",
                                json={"source": "merchandising", "source_id": order.id})

    assert response.get_json()["payload"] == {"persisted": True}
    assert db.session.get(MerchandisingOrder, order.id).alerta_enviada is True

    bad = auth_client.post("/api/dashboard/alerts/check", json={"source": "merchandising", "source_id": "x"})
    assert bad.status_code == 400
    missing = auth_client.post("/api/dashboard/alerts/check", json={"source": "merchandising", "source_id": 999})
    assert missing.status_code == 404


def test_student_search_api(auth_client, user_id):
    db.session.add_all(
        [Student(user_id=user_id, full_name="Lucía Mendoza"), Student(user_id=user_id, full_name="Martina")]
    )
    db.session.commit()

    payload = auth_client.get("/api/students/search?q=luc").get_json()["payload"]

    assert [s["full_name"] for s in payload] == ["Lucía Mendoza"]


def test_create_cuota_route(auth_client, user_id):
    response = auth_client.post(
        "/cuotas/",
        data={"alumna": "Lucía", "monto": "25000", "fecha": "2026-01-10", "grupo": "escuela", "medio": "efectivo"},
        follow_redirects=True,
    )

    assert "La cuota se ha cargado con éxito" in response.get_data(as_text=True)
    assert db.session.query(Cuota).filter_by(user_id=user_id).one().vencimiento == date(2026, 2, 10)


def test_create_cuota_route_missing_fields(auth_client):
    response = auth_client.post("/cuotas/", data={"alumna": "Lucía"}, follow_redirects=True)

    assert "Por favor completa todos los campos obligatorios" in response.get_data(as_text=True)


def test_export_and_import_cuotas_routes(auth_client, user_id):
    empty = auth_client.get("/cuotas/export", follow_redirects=True)
    assert "No hay cuotas para exportar" in empty.get_data(as_text=True)

    output = BytesIO()
    pd.DataFrame([["Ana", "jardin", 1000]], columns=["Alumna", "Grupo", "Monto"]).to_excel(
        output, index=False, engine="openpyxl"
    )
    output.seek(0)
    imported = auth_client.post(
        "/cuotas/import",
        data={"file": (output, "cuotas.xlsx")},
        content_type="multipart/form-data",
        follow_redirects=True,
    )
    assert "Se importaron 1 cuotas correctamente" in imported.get_data(as_text=True)

    exported = auth_client.get("/cuotas/export")
    assert exported.status_code == 200
    assert "attachment" in exported.headers["Content-Disposition"]
    assert f"cuotas_{date.today().isoformat()}.xlsx" in exported.headers["Content-Disposition"]


def test_tournament_routes(auth_client, user_id):
    auth_client.post(
        "/torneos/",
        data={"name": "Copa Primavera", "date": "2026-09-21", "location": "Club", "category": "Nivel 1, Nivel 2"},
    )
    tournament = db.session.query(Tournament).filter_by(user_id=user_id).one()
    assert tournament.category == ["Nivel 1", "Nivel 2"]

    auth_client.post(
        f"/torneos/{tournament.id}/participantes",
        data={"student_name": "Lucía", "level": "Nivel 1", "payment_status": "partial",
              "payment_amount": "5000", "amount_due": "15000"},
    )
    detail = auth_client.get(f"/torneos/{tournament.id}")
    assert "Lucía" in detail.get_data(as_text=True)

    export = auth_client.get(f"/torneos/{tournament.id}/export")
    assert "Copa_Primavera_participantes.xlsx" in export.headers["Content-Disposition"]

    assert auth_client.get("/torneos/999").status_code == 404


def test_update_participant_route_sets_amount_due_and_checks_tournament(auth_client, user_id):
    copa = Tournament(user_id=user_id, name="Copa", date=date(2026, 3, 1), location="Club", category=["Nivel 1"])
    liga = Tournament(user_id=user_id, name="Liga", date=date(2026, 4, 1), location="Club", category=["Nivel 1"])
    db.session.add_all([copa, liga])
    db.session.commit()
    auth_client.post(
        f"/torneos/{copa.id}/participantes",
        data={"student_name": "Lucía", "level": "Nivel 1", "payment_status": "pending"},
    )
    participant = db.session.query(TournamentParticipant).filter_by(user_id=user_id).one()
    update = {"payment_status": "partial", "payment_amount": "5000", "amount_due": "15000"}

    wrong = auth_client.post(f"/torneos/{liga.id}/participantes/{participant.id}", data=update)
    assert wrong.status_code == 404
    assert db.session.get(TournamentParticipant, participant.id).payment_status == "pending"

    auth_client.post(f"/torneos/{copa.id}/participantes/{participant.id}", data=update)
    refreshed = db.session.get(TournamentParticipant, participant.id)
    assert refreshed.amount_due == Decimal("15000")
    assert refreshed.remaining_amount == Decimal("10000")

    alerts = auth_client.get("/api/dashboard/alerts").get_json()["payload"]
    assert [a["id"] for a in alerts] == [f"torneo-{participant.id}"]


def test_export_failure_is_logged_and_flashed(auth_client, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("db caída")

    monkeypatch.setattr(cuota_service, "export_cuotas", broken)
    monkeypatch.setattr(tournament_service, "export_all_tournaments", broken)

    cuotas = auth_client.get("/cuotas/export", follow_redirects=True)
    torneos = auth_client.get("/torneos/export", follow_redirects=True)

    assert cuotas.status_code == 200
    assert "No se pudo generar el archivo Excel" in cuotas.get_data(as_text=True)
    assert torneos.status_code == 200
    assert "No se pudo generar el archivo Excel" in torneos.get_data(as_text=True)


def test_toggle_failure_is_logged_and_flashed(auth_client, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("db caída")

    monkeypatch.setattr(merchandising_service, "toggle_delivered", broken)

    response = auth_client.post("/merchandising/1/entregado", follow_redirects=True)

    assert response.status_code == 200
    assert "No se pudo actualizar el pedido" in response.get_data(as_text=True)


def test_merchandising_partial_validation_route(auth_client):
    response = auth_client.post(
        "/merchandising/",
        data={"producto": "Malla", "alumna": "Lucía", "monto": "10000", "medio": "efectivo",
              "observacion_pago": "parcial", "monto_pagado": "10000", "fecha": "2026-01-05"},
        follow_redirects=True,
    )

    assert "menor al total" in response.get_data(as_text=True)


def test_merchandising_rejects_non_finite_amount(auth_client):
    response = auth_client.post(
        "/merchandising/",
        data={"producto": "Malla", "alumna": "Lucía", "monto": "NaN", "medio": "efectivo",
              "observacion_pago": "completo", "fecha": "2026-01-05"},
        follow_redirects=True,
    )

    assert "Por favor completa todos los campos obligatorios" in response.get_data(as_text=True)
    assert db.session.query(MerchandisingOrder).count() == 0


def test_uploaded_file_is_served(auth_client, user_id):
    response = auth_client.post(
        "/inscripciones/",
        data={"full_name": "Lucía", "birth_date": "2015-04-02", "dni": "1",
              "photo": (BytesIO(b"fake-image"), "foto.png")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 302

    student = db.session.query(Student).filter_by(user_id=user_id).one()
    served = auth_client.get(student.photo)
    assert served.status_code == 200
    assert served.data == b"fake-image"

    assert auth_client.get("/files/otro-bucket/x.png").status_code == 404
