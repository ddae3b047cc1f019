"""Schemas garage / Garage schemas.

Les identifiants sont exposes sous la cle ``_id`` / identifiers are exposed as ``_id``.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from throttle_vault.schemas.car_model import CamelModel


# --- Notes ---

class NoteEntry(CamelModel):
    """Note dans un document complet / Note inside a whole-document write."""
    id: str | None = Field(default=None, alias="_id")
    date: str | None = None
    content: str


class NoteCreate(CamelModel):
    # Types laches : la route valide et repond 400 / loosely typed, the route validates and answers 400
    content: Any = None
    date: Any = None


class NoteUpdate(CamelModel):
    content: Any = None
    date: Any = None


class NoteRead(CamelModel):
    id: str = Field(alias="_id")
    date: str
    content: str


# --- Service logs ---

class ServiceLogEntry(CamelModel):
    id: str | None = Field(default=None, alias="_id")
    date: str | None = None
    service: str
    mileage: int | None = None
    cost: float | None = None
    notes: str | None = None


class ServiceLogCreate(CamelModel):
    service: Any = None
    date: Any = None
    mileage: Any = None
    cost: Any = None
    notes: Any = None


class ServiceLogUpdate(ServiceLogCreate):
    pass


class ServiceLogRead(CamelModel):
    id: str = Field(alias="_id")
    date: str
    service: str
    mileage: int | None = None
    cost: float | None = None
    notes: str | None = None


# --- Garage car ---

def _legacy_notes(value):
    """Anciennes versions : notes en texte libre / Legacy shape: notes as a bare string."""
    if isinstance(value, str):
        return [{"content": value.strip()}] if value.strip() else []
    return value


LegacyNotes = Annotated[list[NoteEntry], BeforeValidator(_legacy_notes)]


class GarageCarCreate(CamelModel):
    model_slug: str = Field(min_length=1, max_length=100)
    model_name: str = Field(min_length=1, max_length=150)
    nickname: str = Field(min_length=1, max_length=100)
    year: int
    trim: str = Field(min_length=1, max_length=100)
    mileage: int | None = None
    notes: LegacyNotes = []
    service_logs: list[ServiceLogEntry] = []
    # Ignore : remplace par l'utilisateur authentifie / ignored, replaced by the caller
    username: str | None = None


class GarageCarUpdate(CamelModel):
    model_slug: str | None = Field(default=None, min_length=1, max_length=100)
    model_name: str | None = Field(default=None, min_length=1, max_length=150)
    nickname: str | None = Field(default=None, min_length=1, max_length=100)
    year: int | None = None
    trim: str | None = Field(default=None, min_length=1, max_length=100)
    mileage: int | None = None
    # None = sous-ressources inchangees / None leaves sub-resources untouched
    notes: Annotated[list[NoteEntry] | None, BeforeValidator(_legacy_notes)] = None
    service_logs: list[ServiceLogEntry] | None = None
    username: str | None = None


class GarageCarRead(CamelModel):
    """Document garage ; aussi utilise cote client / Garage document, also used client-side.

    ``id`` is None for a car the client has not saved yet.
    """
    id: str | None = Field(default=None, alias="_id")
    username: str = ""
    model_slug: str
    model_name: str
    nickname: str
    year: int
    trim: str
    mileage: int | None = None
    notes: list[NoteRead] = []
    service_logs: list[ServiceLogRead] = []
    date_added: str | None = None
