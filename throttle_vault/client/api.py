"""Client HTTP de l'API / HTTP client for the REST API.

Chaque operation envoie l'en-tete d'authentification de l'utilisateur, verifie
le code de retour et convertit le JSON en schema. Tout autre code leve une
:class:`~throttle_vault.client.errors.ApiError` choisie selon le statut.

Each operation sends the user's auth header, checks the status code and
parses the JSON body into a schema; any other status raises the matching
``ApiError`` subclass. Transport errors (``httpx.HTTPError``) propagate as-is.
"""

import logging
from collections.abc import Callable

import httpx

from throttle_vault.client.auth import AuthUser
from throttle_vault.client.errors import ApiError, UnauthorizedError, error_for_status
from throttle_vault.schemas.car_model import CarModelRead, CarModelSummary
from throttle_vault.schemas.garage import GarageCarRead

logger = logging.getLogger("throttle_vault.client.api")


class GarageApi:
    """Operations REST utilisees par le store / REST operations used by the store."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _error(response: httpx.Response, action: str) -> ApiError:
        detail = ""
        try:
            body = response.json()
            if isinstance(body, dict):
                detail = str(body.get("detail") or body.get("message") or "")
        except ValueError:
            detail = response.text
        message = f"{action}: {response.status_code}"
        if detail:
            message = f"{message} ({detail})"
        logger.debug("API error %s", message)
        return error_for_status(response.status_code, message)

    @staticmethod
    def _json(response: httpx.Response):
        if not response.content:
            raise ApiError("No JSON in response from server", response.status_code)
        try:
            return response.json()
        except ValueError:
            raise ApiError("No JSON in response from server", response.status_code)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    async def list_car_models(self) -> list[CarModelSummary]:
        response = await self.client.get("/api/cars")
        if response.status_code != 200:
            raise self._error(response, "Failed to fetch catalog")
        return [CarModelSummary.model_validate(item) for item in self._json(response)]

    async def request_car_model(self, slug: str, user: AuthUser) -> CarModelRead:
        """GET /api/cars/{slug}."""
        response = await self.client.get(f"/api/cars/{slug}", headers=user.headers())
        if response.status_code != 200:
            raise self._error(response, "Failed to fetch car model")
        return CarModelRead.model_validate(self._json(response))

    # ------------------------------------------------------------------
    # Garage
    # ------------------------------------------------------------------
    async def request_garage(self, user: AuthUser) -> list[GarageCarRead]:
        """GET /api/garage ; 401 -> UnauthorizedError."""
        response = await self.client.get("/api/garage", headers=user.headers())
        if response.status_code == 401:
            raise UnauthorizedError("Unauthorized", 401)
        if response.status_code != 200:
            raise self._error(response, "Failed to fetch garage")
        body = self._json(response)
        if not isinstance(body, list):
            raise ApiError("No array in response from server", response.status_code)
        return [GarageCarRead.model_validate(item) for item in body]

    async def save_garage_car(
        self,
        car: GarageCarRead,
        user: AuthUser,
        on_success: Callable[[], None] | None = None,
        on_failure: Callable[[Exception], None] | None = None,
    ) -> GarageCarRead:
        """POST sans id, PUT avec id / POST when the car has no id, PUT otherwise.

        ``on_failure`` is called with the error before it is re-raised;
        ``on_success`` is called once the saved document is parsed.
        """
        body = car.model_dump(by_alias=True, exclude_none=True, mode="json")
        try:
            if car.id:
                response = await self.client.put(f"/api/garage/{car.id}", json=body, headers=user.headers())
            else:
                response = await self.client.post("/api/garage", json=body, headers=user.headers())
            if response.status_code not in (200, 201):
                raise self._error(response, "Failed to save garage car")
            saved = GarageCarRead.model_validate(self._json(response))
        except Exception as exc:
            if on_failure is not None:
                on_failure(exc)
            raise
        if on_success is not None:
            on_success()
        return saved

    async def delete_garage_car(self, car_id: str, user: AuthUser) -> None:
        """DELETE /api/garage/{id} ; 200/204 -> None."""
        response = await self.client.delete(f"/api/garage/{car_id}", headers=user.headers())
        if response.status_code not in (200, 204):
            raise self._error(response, "Failed to delete garage car")

    async def add_note(self, car_id: str, content: str, user: AuthUser, date: str | None = None) -> GarageCarRead:
        payload = {"content": content}
        if date is not None:
            payload["date"] = date
        response = await self.client.post(f"/api/garage/{car_id}/notes", json=payload, headers=user.headers())
        if response.status_code != 200:
            raise self._error(response, "Failed to add note")
        return GarageCarRead.model_validate(self._json(response))

    async def add_service_log(self, car_id: str, entry: dict, user: AuthUser) -> GarageCarRead:
        response = await self.client.post(
            f"/api/garage/{car_id}/service-logs", json=entry, headers=user.headers()
        )
        if response.status_code != 200:
            raise self._error(response, "Failed to add service log")
        return GarageCarRead.model_validate(self._json(response))

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    async def login(self, username: str, password: str) -> AuthUser:
        return await self._credentials("/auth/login", username, password, "Invalid username or password")

    async def register(self, username: str, password: str) -> AuthUser:
        return await self._credentials("/auth/register", username, password, "Registration failed")

    async def _credentials(self, path: str, username: str, password: str, action: str) -> AuthUser:
        response = await self.client.post(path, json={"username": username, "password": password})
        if response.status_code not in (200, 201):
            raise self._error(response, action)
        body = self._json(response)
        return AuthUser(username=username, token=body["token"], refresh_token=body.get("refresh_token"))
