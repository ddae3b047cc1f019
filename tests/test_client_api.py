"""Tests du client HTTP / HTTP client tests (mocked transport)."""

import httpx
import pytest

from throttle_vault.client import (
    ANONYMOUS,
    ApiError,
    ConflictError,
    ForbiddenError,
    GarageApi,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)
from throttle_vault.client.errors import ValidationError, error_for_status

from conftest import USER, make_car


def api_for(handler) -> GarageApi:
    return GarageApi(httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test"))


@pytest.mark.parametrize(
    "status, error",
    [
        (400, ValidationError),
        (401, UnauthorizedError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (409, ConflictError),
        (422, ValidationError),
        (500, ServerError),
        (503, ServerError),
        (418, ApiError),
    ],
)
def test_error_for_status(status, error):
    exc = error_for_status(status, "boom")
    assert type(exc) is error
    assert exc.status == status


@pytest.mark.asyncio
async def test_request_garage_sends_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[make_car("a1").model_dump(by_alias=True)])

    cars = await api_for(handler).request_garage(USER)
    assert seen["auth"] == "Bearer t0k3n"
    assert [c.id for c in cars] == ["a1"]


@pytest.mark.asyncio
async def test_request_garage_unauthorized():
    def handler(request):
        assert "Authorization" not in request.headers
        return httpx.Response(401, json={"detail": "Not authenticated"})

    with pytest.raises(UnauthorizedError):
        await api_for(handler).request_garage(ANONYMOUS)


@pytest.mark.asyncio
async def test_request_garage_not_a_list():
    api = api_for(lambda request: httpx.Response(200, json={"cars": []}))
    with pytest.raises(ApiError, match="No array"):
        await api.request_garage(USER)


@pytest.mark.asyncio
async def test_car_model_not_found_message():
    api = api_for(lambda request: httpx.Response(404, json={"detail": 'Car "nope" not found'}))
    with pytest.raises(NotFoundError) as excinfo:
        await api.request_car_model("nope", USER)
    assert "Car \"nope\" not found" in str(excinfo.value)
    assert excinfo.value.status == 404


@pytest.mark.asyncio
async def test_empty_body_is_an_error():
    api = api_for(lambda request: httpx.Response(200))
    with pytest.raises(ApiError, match="No JSON"):
        await api.list_car_models()


@pytest.mark.asyncio
async def test_save_posts_new_car_and_puts_existing():
    requests = []

    def handler(request):
        requests.append((request.method, request.url.path))
        status = 201 if request.method == "POST" else 200
        return httpx.Response(status, json=make_car("a1").model_dump(by_alias=True))

    api = api_for(handler)
    await api.save_garage_car(make_car(None), USER)
    await api.save_garage_car(make_car("a1"), USER)
    assert requests == [("POST", "/api/garage"), ("PUT", "/api/garage/a1")]


@pytest.mark.asyncio
async def test_save_callbacks():
    ok = api_for(lambda request: httpx.Response(201, json=make_car("a1").model_dump(by_alias=True)))
    done = []
    await ok.save_garage_car(make_car(None), USER, on_success=lambda: done.append("ok"))
    assert done == ["ok"]

    failing = api_for(lambda request: httpx.Response(500, json={"detail": "Database error"}))
    failures = []
    with pytest.raises(ServerError):
        await failing.save_garage_car(
            make_car(None), USER, on_success=lambda: done.append("no"), on_failure=failures.append
        )
    assert done == ["ok"]
    assert len(failures) == 1
    assert isinstance(failures[0], ServerError)


@pytest.mark.asyncio
async def test_delete_accepts_no_content():
    api = api_for(lambda request: httpx.Response(204))
    assert await api.delete_garage_car("a1", USER) is None


@pytest.mark.asyncio
async def test_login_conflict_and_success():
    def handler(request):
        if request.url.path == "/auth/register":
            return httpx.Response(409, json={"detail": "Username already taken"})
        return httpx.Response(200, json={"token": "abc", "refresh_token": "def", "token_type": "bearer"})

    api = api_for(handler)
    with pytest.raises(ConflictError):
        await api.register("alice", "pw")

    user = await api.login("alice", "pw")
    assert user.username == "alice"
    assert user.authenticated
    assert user.headers() == {"Authorization": "Bearer abc"}
