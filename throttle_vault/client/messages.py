"""Catalogue des messages du store / Store message catalog.

Les vues envoient les messages de requete ; les messages de chargement sont
produits par le reducer une fois l'appel API termine.
Views send the request messages; load/saved/deleted messages are produced
internally once an API call resolves.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from pydantic.alias_generators import to_snake

from throttle_vault.schemas.car_model import CarModelRead
from throttle_vault.schemas.garage import GarageCarRead


class UnhandledMessageError(Exception):
    """Message hors catalogue : erreur de programmation / Message outside the catalog: programming error."""

    def __init__(self, message: Any):
        kind = getattr(message, "kind", message)
        super().__init__(f'Unhandled Store message "{kind}"')
        self.message = message


# --- Messages des vues / View messages ---

@dataclass(frozen=True)
class CarModelRequest:
    kind: ClassVar[str] = "car-model/request"
    slug: str


@dataclass(frozen=True)
class GarageRequest:
    kind: ClassVar[str] = "garage/request"


@dataclass(frozen=True)
class GarageSave:
    kind: ClassVar[str] = "garage/save"
    car: GarageCarRead
    on_success: Callable[[], None] | None = field(default=None, compare=False)
    on_failure: Callable[[Exception], None] | None = field(default=None, compare=False)


@dataclass(frozen=True)
class GarageDelete:
    kind: ClassVar[str] = "garage/delete"
    id: str


# --- Messages internes / Internal messages ---

@dataclass(frozen=True)
class CarModelLoad:
    kind: ClassVar[str] = "car-model/load"
    slug: str
    car_model: CarModelRead


@dataclass(frozen=True)
class GarageLoad:
    kind: ClassVar[str] = "garage/load"
    cars: tuple[GarageCarRead, ...]


@dataclass(frozen=True)
class GarageSaved:
    kind: ClassVar[str] = "garage/saved"
    car: GarageCarRead


@dataclass(frozen=True)
class GarageDeleted:
    kind: ClassVar[str] = "garage/deleted"
    id: str


Msg = Union[
    CarModelRequest,
    GarageRequest,
    GarageSave,
    GarageDelete,
    CarModelLoad,
    GarageLoad,
    GarageSaved,
    GarageDeleted,
]

MESSAGE_TYPES: dict[str, type] = {
    cls.kind: cls
    for cls in (
        CarModelRequest,
        GarageRequest,
        GarageSave,
        GarageDelete,
        CarModelLoad,
        GarageLoad,
        GarageSaved,
        GarageDeleted,
    )
}


def _document(key: str, value: Any) -> Any:
    """Documents JSON -> schemas / JSON documents to schemas."""
    if key == "car_model" and isinstance(value, dict):
        return CarModelRead.model_validate(value)
    if key == "car" and isinstance(value, dict):
        return GarageCarRead.model_validate(value)
    if key == "cars":
        return tuple(GarageCarRead.model_validate(c) if isinstance(c, dict) else c for c in value)
    return value


def message_from_tuple(kind: str, payload: dict | None = None, callbacks: dict | None = None) -> Msg:
    """Construire un message depuis la forme ``[kind, payload, callbacks]``.

    Build a message from its tagged form, e.g.
    ``message_from_tuple("car-model/load", {"slug": "mustang", "carModel": {...}})``.
    Keys may be camelCase or snake_case; JSON documents are parsed into schemas.
    Callbacks (``onSuccess``/``onFailure``) only apply to ``garage/save``.
    """
    cls = MESSAGE_TYPES.get(kind)
    if cls is None:
        raise UnhandledMessageError(kind)
    kwargs = {to_snake(key): value for key, value in (payload or {}).items()}
    kwargs = {key: _document(key, value) for key, value in kwargs.items()}
    if callbacks and cls is GarageSave:
        kwargs.update({to_snake(key): value for key, value in callbacks.items()})
    return cls(**kwargs)
