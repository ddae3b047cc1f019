"""Couche client : store, reducer et client API / Client layer: store, reducer and API client."""

from throttle_vault.client.api import GarageApi
from throttle_vault.client.auth import ANONYMOUS, AuthUser
from throttle_vault.client.errors import (
    ApiError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
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
    message_from_tuple,
)
from throttle_vault.client.model import Model, init
from throttle_vault.client.store import Store
from throttle_vault.client.update import update

__all__ = [
    "ANONYMOUS",
    "ApiError",
    "AuthUser",
    "CarModelLoad",
    "CarModelRequest",
    "ConflictError",
    "ForbiddenError",
    "GarageApi",
    "GarageDelete",
    "GarageDeleted",
    "GarageLoad",
    "GarageRequest",
    "GarageSave",
    "GarageSaved",
    "Model",
    "Msg",
    "NotFoundError",
    "ServerError",
    "Store",
    "UnauthorizedError",
    "UnhandledMessageError",
    "ValidationError",
    "init",
    "message_from_tuple",
    "update",
]
