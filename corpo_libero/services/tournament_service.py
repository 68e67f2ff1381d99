"""
Servicios para torneos y participantes.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from corpo_libero.models import Tournament, TournamentParticipant
from corpo_libero.services import settings_service, spreadsheet_service
from corpo_libero.services.logging import log_structured_event
from corpo_libero.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

PAYMENT_STATUS_CHOICES = ["paid", "partial", "pending"]
PAYMENT_STATUS_LABELS = spreadsheet_service.PAYMENT_STATUS_LABELS
LEVEL_CHOICES = ["Nivel 1", "Nivel 2", "Nivel 3", "Nivel 4", "Nivel 5", "Libre"]


def parse_categories(raw: str) -> List[str]:
    """"Nivel 1, Nivel 2" -> ["Nivel 1", "Nivel 2"]."""
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def list_tournaments(user_id: int) -> List[Tournament]:
    with UnitOfWork() as uow:
        return uow.tournaments.list_with_participants(user_id)


def get_tournament(user_id: int, tournament_id: int) -> Optional[Tournament]:
    with UnitOfWork() as uow:
        return uow.tournaments.get_for_user(tournament_id, user_id)


def create_tournament(
    user_id: int,
    name: str,
    tournament_date: Optional[date],
    location: str,
    categories: List[str],
) -> Tournament:
    name = (name or "").strip()
    location = (location or "").strip()
    if not name or tournament_date is None or not location or not categories:
        raise ValueError("Por favor completa nombre, fecha, lugar y al menos una categoría")

    tournament = Tournament(
        user_id=user_id,
        name=name,
        date=tournament_date,
        location=location,
        category=list(categories),
    )
    with UnitOfWork() as uow:
        uow.tournaments.add(tournament)
        uow.commit()

    log_structured_event("tournament_created", tournament_id=tournament.id, user_id=user_id)
    return tournament


def add_participant(
    user_id: int,
    tournament_id: int,
    student_name: str,
    level: str,
    payment_status: str = "pending",
    payment_date: Optional[date] = None,
    payment_amount: Optional[Decimal] = None,
    amount_due: Optional[Decimal] = None,
    payment_method: Optional[str] = None,
    observation: Optional[str] = None,
    today: Optional[date] = None,
) -> TournamentParticipant:
    """
    Inscribe a una gimnasta en el torneo.

    Con pago parcial el saldo vence PARTIAL_PAYMENT_DUE_DAYS días después
    de hoy.
    """
    student_name = (student_name or "").strip()
    level = (level or "").strip()
    if not student_name or not level:
        raise ValueError("Por favor completa el nombre de la gimnasta y el nivel")
    if payment_status not in PAYMENT_STATUS_CHOICES:
        raise ValueError("Estado de pago inválido")

    today = today or date.today()
    due_date = None
    if payment_status == "partial":
        due_days = settings_service.get_int_setting("PARTIAL_PAYMENT_DUE_DAYS", 15)
        due_date = today + timedelta(days=due_days)

    with UnitOfWork() as uow:
        tournament = uow.tournaments.get_for_user(tournament_id, user_id)
        if tournament is None:
            raise ValueError("Torneo no encontrado")

        student = uow.students.get_by_full_name(user_id, student_name)
        participant = TournamentParticipant(
            user_id=user_id,
            tournament_id=tournament.id,
            student_id=student.id if student else None,
            student_name=student_name,
            level=level,
            payment_date=payment_date,
            payment_amount=payment_amount,
            amount_due=amount_due,
            payment_method=payment_method or None,
            payment_status=payment_status,
            observation=observation or None,
            due_date=due_date,
        )
        uow.participants.add(participant)
        uow.commit()

    log_structured_event(
        "participant_added",
        tournament_id=tournament_id,
        participant_id=participant.id,
        payment_status=payment_status,
    )
    return participant


def update_participant_payment(
    user_id: int,
    participant_id: int,
    payment_status: str,
    payment_date: Optional[date] = None,
    payment_amount: Optional[Decimal] = None,
    amount_due: Optional[Decimal] = None,
    payment_method: Optional[str] = None,
    observation: Optional[str] = None,
    today: Optional[date] = None,
) -> TournamentParticipant:
    if payment_status not in PAYMENT_STATUS_CHOICES:
        raise ValueError("Estado de pago inválido")

    with UnitOfWork() as uow:
        participant = uow.participants.get_for_user(participant_id, user_id)
        if participant is None:
            raise ValueError("Participante no encontrado")

        participant.payment_status = payment_status
        participant.payment_date = payment_date
        participant.payment_amount = payment_amount
        if amount_due is not None:
            participant.amount_due = amount_due
        participant.payment_method = payment_method or None
        participant.observation = observation or None

        if payment_status == "partial":
            if participant.due_date is None:
                due_days = settings_service.get_int_setting("PARTIAL_PAYMENT_DUE_DAYS", 15)
                participant.due_date = (today or date.today()) + timedelta(days=due_days)
        else:
            participant.due_date = None

        uow.commit()

    log_structured_event(
        "participant_payment_updated",
        participant_id=participant_id,
        payment_status=payment_status,
    )
    return participant


def export_tournament(user_id: int, tournament_id: int) -> tuple[bytes, str]:
    with UnitOfWork() as uow:
        tournament = uow.tournaments.get_for_user(tournament_id, user_id)
        if tournament is None:
            raise ValueError("Torneo no encontrado")
        content = spreadsheet_service.build_tournament_roster_workbook(tournament)
        filename = spreadsheet_service.tournament_roster_filename(tournament)
    return content, filename


def export_all_tournaments(user_id: int) -> tuple[bytes, str]:
    tournaments = list_tournaments(user_id)
    content = spreadsheet_service.build_tournaments_history_workbook(tournaments)
    return content, spreadsheet_service.tournaments_history_filename()
