"""Tests API catalogue et authentification / Catalog and auth API tests."""

import pytest

from conftest import MUSTANG, register


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "running"
    assert "X-Request-ID" in resp.headers


@pytest.mark.asyncio
async def test_hello(client):
    resp = await client.get("/hello")
    assert resp.status_code == 200
    assert resp.text == "Hello, World"


# --- Auth ---

@pytest.mark.asyncio
async def test_register_then_login(client):
    await register(client, "carol", "hunter22")
    resp = await client.post("/auth/login", json={"username": "carol", "password": "hunter22"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["token"]
    assert data["token_type"] == "bearer"

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "carol"


@pytest.mark.asyncio
async def test_register_duplicate_username(client):
    await register(client, "carol")
    resp = await client.post("/auth/register", json={"username": "carol", "password": "other"})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    await register(client, "carol", "right-one")
    resp = await client.post("/auth/login", json={"username": "carol", "password": "wrong-one"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_refresh_token(client):
    resp = await client.post("/auth/register", json={"username": "dave", "password": "pw"})
    refresh_token = resp.json()["refresh_token"]
    resp = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
    assert resp.status_code == 200
    assert resp.json()["token"]

    # Un access token n'est pas un refresh token / an access token is not a refresh token
    access = resp.json()["token"]
    resp = await client.post("/auth/refresh", json={"refresh_token": access})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token_rejected(client):
    resp = await client.get("/api/garage", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


# --- Catalogue / Catalog ---

@pytest.mark.asyncio
async def test_car_model_lifecycle(client, alice):
    resp = await client.post("/api/cars", json=MUSTANG, headers=alice)
    assert resp.status_code == 201
    assert resp.json()["slug"] == "mustang"
    assert resp.json()["overview"]["bodyStyle"] == "Coupe"

    resp = await client.get("/api/cars/mustang")
    assert resp.status_code == 200
    assert resp.json()["slug"] == "mustang"

    resp = await client.delete("/api/cars/mustang")
    assert resp.status_code == 401

    resp = await client.delete("/api/cars/mustang", headers=alice)
    assert resp.status_code == 204
    resp = await client.get("/api/cars/mustang")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_create_car_model_requires_auth(client):
    resp = await client.post("/api/cars", json=MUSTANG)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_duplicate_slug_conflict(client, alice):
    assert (await client.post("/api/cars", json=MUSTANG, headers=alice)).status_code == 201
    resp = await client.post("/api/cars", json=MUSTANG, headers=alice)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_list_car_models_summary(client, alice):
    resp = await client.get("/api/cars")
    assert resp.status_code == 200
    assert resp.json() == []

    camaro = dict(MUSTANG, slug="camaro", name="Chevrolet Camaro", href="/app/models/camaro",
                  images={"hero": "/images/cars/camaro-hero.jpg", "gallery": [], "trims": {}})
    await client.post("/api/cars", json=MUSTANG, headers=alice)
    await client.post("/api/cars", json=camaro, headers=alice)

    resp = await client.get("/api/cars")
    catalog = resp.json()
    assert [c["slug"] for c in catalog] == ["camaro", "mustang"]
    assert catalog[0]["image"] == "/images/cars/camaro-hero.jpg"
    assert catalog[1]["image"] is None
    assert "trims" not in catalog[0]


@pytest.mark.asyncio
async def test_update_car_model(client, alice):
    await client.post("/api/cars", json=MUSTANG, headers=alice)
    trims = [{"name": "GT", "engine": "5.0L V8", "horsepower": 460, "torque": 420,
              "zeroToSixty": "~4.3 s", "topSpeed": "~155 mph", "years": "2018-2023"}]
    replacement = dict(MUSTANG, slug="ignored", name="Ford Mustang S550", trims=trims)

    resp = await client.put("/api/cars/mustang", json=replacement, headers=alice)
    assert resp.status_code == 200
    data = resp.json()
    assert data["slug"] == "mustang"
    assert data["name"] == "Ford Mustang S550"
    assert data["trims"][0]["zeroToSixty"] == "~4.3 s"
    assert data["trims"][0]["horsepower"] == 460


@pytest.mark.asyncio
async def test_update_or_delete_unknown_car_model(client, alice):
    resp = await client.put("/api/cars/nope", json=MUSTANG, headers=alice)
    assert resp.status_code == 404
    resp = await client.delete("/api/cars/nope", headers=alice)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_invalid_slug_rejected(client, alice):
    resp = await client.post("/api/cars", json=dict(MUSTANG, slug="has space"), headers=alice)
    assert resp.status_code == 422
