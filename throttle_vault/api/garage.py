"""Routes Garage / Garage API routes.

Toutes les routes exigent un utilisateur authentifie ; chaque voiture n'est
visible et modifiable que par son proprietaire.
Every route requires an authenticated user; a car is only visible to its owner.

Notes et carnet d'entretien sont des sous-ressources : chaque ecriture ajoute,
modifie ou supprime une seule ligne et renvoie le document parent complet.
Notes and service logs are sub-resources: each write touches a single row and
returns the whole parent document.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from throttle_vault.database import get_db
from throttle_vault.models.garage_car import GarageCar, GarageNote, ServiceLog, new_id, utc_now_iso
from throttle_vault.models.user import User
from throttle_vault.schemas.garage import (
    GarageCarCreate,
    GarageCarRead,
    GarageCarUpdate,
    NoteCreate,
    NoteEntry,
    NoteUpdate,
    ServiceLogCreate,
    ServiceLogEntry,
    ServiceLogUpdate,
)
from throttle_vault.api.deps import get_current_user, get_owned_car

logger = logging.getLogger("throttle_vault.api.garage")

router = APIRouter()

# Colonnes non nulles : un null explicite est ignore / non-nullable columns, explicit nulls are skipped
_REQUIRED_FIELDS = {"model_slug", "model_name", "nickname", "year", "trim"}


def _parse_date(value: Any) -> str:
    """Date ISO 8601 normalisee, maintenant si absente / Normalized ISO 8601 date, now when omitted.

    Sub-second precision is kept (milliseconds, or microseconds when given).
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return utc_now_iso()
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f'Invalid date "{value}"')
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise HTTPException(status_code=400, detail=f'Invalid date "{value}"')
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    if not parsed.microsecond:
        timespec = "seconds"
    elif parsed.microsecond % 1000:
        timespec = "microseconds"
    else:
        timespec = "milliseconds"
    return parsed.isoformat(timespec=timespec)


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise HTTPException(status_code=400, detail=f"{field} is required")
    return value.strip()


def _optional_text(value: Any, field: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{field} must be a string")
    return value


def _optional_number(value: Any, field: str, cast: type) -> int | float | None:
    """Entier ou decimal optionnel / Optional int or float, 400 otherwise."""
    if value is None:
        return None
    if isinstance(value, bool) or (cast is int and isinstance(value, float) and not value.is_integer()):
        raise HTTPException(status_code=400, detail=f"{field} must be a number")
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=f"{field} must be a number")


def _unique_ids(entries: list, label: str) -> None:
    ids = [entry.id for entry in entries if entry.id]
    if len(ids) != len(set(ids)):
        raise HTTPException(status_code=400, detail=f"Duplicate {label} id")


def _sync_notes(car: GarageCar, entries: list[NoteEntry]) -> None:
    """Aligner les notes sur la liste recue / Align notes with the submitted list.

    Known ids are updated in place, unknown entries are appended, missing ones are removed.
    An entry without a date keeps its stored date.
    """
    _unique_ids(entries, "note")
    existing = {note.id: note for note in car.notes}
    kept = []
    for entry in entries:
        note = existing.get(entry.id) if entry.id else None
        if note is None:
            note = GarageNote(id=new_id())
        note.content = _require_text(entry.content, "content")
        if entry.date is not None or note.date is None:
            note.date = _parse_date(entry.date)
        kept.append(note)
    car.notes = kept
    car.notes.reorder()


def _sync_service_logs(car: GarageCar, entries: list[ServiceLogEntry]) -> None:
    """Meme logique que les notes / Same rules as notes."""
    _unique_ids(entries, "service log")
    existing = {log.id: log for log in car.service_logs}
    kept = []
    for entry in entries:
        log = existing.get(entry.id) if entry.id else None
        if log is None:
            log = ServiceLog(id=new_id())
        log.service = _require_text(entry.service, "service")
        if entry.date is not None or log.date is None:
            log.date = _parse_date(entry.date)
        log.mileage = entry.mileage
        log.cost = entry.cost
        log.notes = entry.notes
        kept.append(log)
    car.service_logs = kept
    car.service_logs.reorder()


# ─── Notes (avant les routes /{car_id} / before the generic /{car_id} routes) ───

@router.post("/{car_id}/notes", response_model=GarageCarRead)
async def add_note(
    data: NoteCreate,
    car: GarageCar = Depends(get_owned_car),
    db: AsyncSession = Depends(get_db),
):
    """Ajouter une note / Append a note."""
    content = _require_text(data.content, "content")
    date = _parse_date(data.date)
    car.notes.append(GarageNote(id=new_id(), date=date, content=content))
    await db.flush()
    logger.info("Note added to garage car %s", car.id)
    return car


@router.put("/{car_id}/notes/{note_id}", response_model=GarageCarRead)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    car: GarageCar = Depends(get_owned_car),
    db: AsyncSession = Depends(get_db),
):
    """Modifier une note / Update a note."""
    note = car.find_note(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail=f'Note "{note_id}" not found')
    if data.content is not None:
        note.content = _require_text(data.content, "content")
    if data.date is not None:
        note.date = _parse_date(data.date)
    await db.flush()
    return car


@router.delete("/{car_id}/notes/{note_id}", response_model=GarageCarRead)
async def delete_note(
    note_id: str,
    car: GarageCar = Depends(get_owned_car),
    db: AsyncSession = Depends(get_db),
):
    """Supprimer une note / Delete a note."""
    note = car.find_note(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail=f'Note "{note_id}" not found')
    car.notes.remove(note)
    await db.flush()
    logger.info("Note %s removed from garage car %s", note_id, car.id)
    return car


# ─── Carnet d'entretien / Service logs ───

@router.post("/{car_id}/service-logs", response_model=GarageCarRead)
async def add_service_log(
    data: ServiceLogCreate,
    car: GarageCar = Depends(get_owned_car),
    db: AsyncSession = Depends(get_db),
):
    """Ajouter une entree d'entretien / Append a service log entry."""
    service = _require_text(data.service, "service")
    date = _parse_date(data.date)
    car.service_logs.append(ServiceLog(
        id=new_id(),
        date=date,
        service=service,
        mileage=_optional_number(data.mileage, "mileage", int),
        cost=_optional_number(data.cost, "cost", float),
        notes=_optional_text(data.notes, "notes"),
    ))
    await db.flush()
    logger.info("Service log added to garage car %s", car.id)
    return car


@router.put("/{car_id}/service-logs/{log_id}", response_model=GarageCarRead)
async def update_service_log(
    log_id: str,
    data: ServiceLogUpdate,
    car: GarageCar = Depends(get_owned_car),
    db: AsyncSession = Depends(get_db),
):
    """Modifier une entree d'entretien / Update a service log entry."""
    log = car.find_service_log(log_id)
    if log is None:
        raise HTTPException(status_code=404, detail=f'Service log "{log_id}" not found')
    updates = data.model_dump(exclude_unset=True)
    if "service" in updates:
        log.service = _require_text(updates.pop("service"), "service")
    if "date" in updates:
        log.date = _parse_date(updates.pop("date"))
    if "mileage" in updates:
        log.mileage = _optional_number(updates.pop("mileage"), "mileage", int)
    if "cost" in updates:
        log.cost = _optional_number(updates.pop("cost"), "cost", float)
    if "notes" in updates:
        log.notes = _optional_text(updates.pop("notes"), "notes")
    await db.flush()
    return car


@router.delete("/{car_id}/service-logs/{log_id}", response_model=GarageCarRead)
async def delete_service_log(
    log_id: str,
    car: GarageCar = Depends(get_owned_car),
    db: AsyncSession = Depends(get_db),
):
    """Supprimer une entree d'entretien / Delete a service log entry."""
    log = car.find_service_log(log_id)
    if log is None:
        raise HTTPException(status_code=404, detail=f'Service log "{log_id}" not found')
    car.service_logs.remove(log)
    await db.flush()
    logger.info("Service log %s removed from garage car %s", log_id, car.id)
    return car


# ─── Voitures / Cars ───

@router.get("", response_model=list[GarageCarRead])
async def list_garage(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Voitures de l'utilisateur / The caller's cars."""
    result = await db.execute(
        select(GarageCar)
        .where(GarageCar.username == user.username)
        .order_by(GarageCar.date_added, GarageCar.id)
    )
    return result.scalars().all()


@router.get("/{car_id}", response_model=GarageCarRead)
async def get_garage_car(car: GarageCar = Depends(get_owned_car)):
    """Voir une voiture / Get a garage car."""
    return car


@router.post("", response_model=GarageCarRead, status_code=201)
async def create_garage_car(
    data: GarageCarCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Ajouter une voiture au garage / Add a car to the garage.

    Le username du corps est ignore / any username in the body is ignored.
    """
    dump = data.model_dump(exclude={"notes", "service_logs", "username"})
    car = GarageCar(id=new_id(), username=user.username, date_added=utc_now_iso(), **dump)
    _sync_notes(car, data.notes)
    _sync_service_logs(car, data.service_logs)
    db.add(car)
    await db.flush()
    logger.info("Garage car %s created for %s (%s)", car.id, user.username, car.model_slug)
    return car


@router.put("/{car_id}", response_model=GarageCarRead)
async def update_garage_car(
    data: GarageCarUpdate,
    car: GarageCar = Depends(get_owned_car),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Modifier une voiture / Update a garage car."""
    updates = data.model_dump(exclude_unset=True, exclude={"notes", "service_logs", "username"})
    for key, value in updates.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(car, key, value)
    car.username = user.username

    if data.notes is not None:
        _sync_notes(car, data.notes)
    if data.service_logs is not None:
        _sync_service_logs(car, data.service_logs)

    await db.flush()
    logger.info("Garage car %s updated by %s", car.id, user.username)
    return car


@router.delete("/{car_id}", status_code=204)
async def delete_garage_car(
    car: GarageCar = Depends(get_owned_car),
    db: AsyncSession = Depends(get_db),
):
    """Supprimer une voiture / Delete a garage car."""
    await db.delete(car)
    logger.info("Garage car %s deleted", car.id)
