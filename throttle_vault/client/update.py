"""
Reducer du store / Store reducer.

``update(message, model, user, api=...)`` returns either the next model or a
``(model, effect)`` pair. The effect is an un-awaited coroutine: building it
performs no I/O, the store awaits it and dispatches the message it resolves to.
Errors raised by the API are not caught here; they surface from the effect.
"""

from collections.abc import Coroutine
from dataclasses import replace
from typing import Any, Union

from throttle_vault.client.api import GarageApi
from throttle_vault.client.auth import AuthUser
from throttle_vault.client.messages import (
    CarModelLoad,
    CarModelRequest,
    GarageDelete,
    GarageDeleted,
    GarageLoad,
    GarageRequest,
    GarageSave,
    GarageSaved,
    Msg,
    UnhandledMessageError,
)
from throttle_vault.client.model import Model

Effect = Coroutine[Any, Any, Msg]
UpdateResult = Union[Model, tuple[Model, Effect]]


def update(message: Msg, model: Model, user: AuthUser, *, api: GarageApi) -> UpdateResult:
    if isinstance(message, CarModelRequest):
        # Deja charge : pas de nouvel appel / already loaded: no new request
        if model.car_model is not None and model.car_model.slug == message.slug:
            return model
        return replace(model, car_model=None), _load_car_model(api, message.slug, user)

    if isinstance(message, CarModelLoad):
        return replace(model, car_model=message.car_model)

    if isinstance(message, GarageRequest):
        return model, _load_garage(api, user)

    if isinstance(message, GarageLoad):
        return replace(model, garage_cars=tuple(message.cars))

    if isinstance(message, GarageSave):
        return model, _save_car(api, message, user)

    if isinstance(message, GarageSaved):
        return replace(model, garage_cars=upsert_car(model.garage_cars or (), message.car))

    if isinstance(message, GarageDelete):
        return model, _delete_car(api, message.id, user)

    if isinstance(message, GarageDeleted):
        existing = model.garage_cars or ()
        return replace(model, garage_cars=tuple(c for c in existing if c.id != message.id))

    raise UnhandledMessageError(message)


def upsert_car(cars, car):
    """Remplacer par id ou ajouter en fin / Replace by id in place, or append."""
    if any(c.id == car.id for c in cars):
        return tuple(car if c.id == car.id else c for c in cars)
    return (*cars, car)


# --- Effets / Effects ---

async def _load_car_model(api: GarageApi, slug: str, user: AuthUser) -> CarModelLoad:
    car_model = await api.request_car_model(slug, user)
    return CarModelLoad(slug=slug, car_model=car_model)


async def _load_garage(api: GarageApi, user: AuthUser) -> GarageLoad:
    cars = await api.request_garage(user)
    return GarageLoad(cars=tuple(cars))


async def _save_car(api: GarageApi, message: GarageSave, user: AuthUser) -> GarageSaved:
    saved = await api.save_garage_car(
        message.car,
        user,
        on_success=message.on_success,
        on_failure=message.on_failure,
    )
    return GarageSaved(car=saved)


async def _delete_car(api: GarageApi, car_id: str, user: AuthUser) -> GarageDeleted:
    await api.delete_garage_car(car_id, user)
    return GarageDeleted(id=car_id)
