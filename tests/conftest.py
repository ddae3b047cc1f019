"""Fixtures de test / Test fixtures.

L'environnement est fixe avant l'import de l'application.
Environment is set before the application is imported.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="throttle_vault_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

import throttle_vault.models  # noqa: E402,F401
from throttle_vault.client import AuthUser  # noqa: E402
from throttle_vault.database import Base, engine  # noqa: E402
from throttle_vault.main import app  # noqa: E402
from throttle_vault.schemas.car_model import CarModelRead  # noqa: E402
from throttle_vault.schemas.garage import GarageCarRead  # noqa: E402

MUSTANG = {
    "slug": "mustang",
    "name": "Ford Mustang",
    "category": "muscle-car",
    "icon": "icon-coupe",
    "href": "/app/models/mustang",
    "years": "2015-2024",
    "overview": {"manufacturer": "Ford", "bodyStyle": "Coupe", "history": "Sixth generation"},
    "trims": [],
    "modifications": [],
    "history": [],
}


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def client(database):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register(client: AsyncClient, username: str, password: str = "s3cret-pass") -> dict:
    """Inscrire un utilisateur, renvoyer ses en-tetes / Register a user and return auth headers."""
    resp = await client.post("/auth/register", json={"username": username, "password": password})
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
async def alice(client):
    return await register(client, "alice")


@pytest.fixture
async def bob(client):
    return await register(client, "bob")


def garage_car_body(**overrides) -> dict:
    body = {
        "modelSlug": "mustang",
        "modelName": "Ford Mustang",
        "nickname": "Sally",
        "year": 2018,
        "trim": "GT",
        "mileage": 42000,
    }
    body.update(overrides)
    return body


# --- Client ---

USER = AuthUser(username="alice", token="t0k3n")


def make_car(car_id: str | None, nickname: str = "Sally") -> GarageCarRead:
    return GarageCarRead(
        id=car_id,
        username="alice",
        model_slug="mustang",
        model_name="Ford Mustang",
        nickname=nickname,
        year=2018,
        trim="GT",
    )


class FakeApi:
    """Enregistre les appels au lieu de faire du HTTP / Records calls instead of doing HTTP."""

    def __init__(self):
        self.calls = []

    async def request_car_model(self, slug, user):
        self.calls.append(("request_car_model", slug, user))
        return CarModelRead.model_validate(dict(MUSTANG, slug=slug))

    async def request_garage(self, user):
        self.calls.append(("request_garage", user))
        return [make_car("a1")]

    async def save_garage_car(self, car, user, on_success=None, on_failure=None):
        self.calls.append(("save_garage_car", car.id, user))
        return car.model_copy(update={"id": car.id or "new1"})

    async def delete_garage_car(self, car_id, user):
        self.calls.append(("delete_garage_car", car_id, user))
