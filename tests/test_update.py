"""Tests du reducer / Reducer tests."""

from dataclasses import dataclass

import pytest

from throttle_vault.client import (
    CarModelLoad,
    CarModelRequest,
    GarageDelete,
    GarageDeleted,
    GarageLoad,
    GarageRequest,
    GarageSave,
    GarageSaved,
    Model,
    UnhandledMessageError,
    init,
    message_from_tuple,
    update,
)
from throttle_vault.schemas.car_model import CarModelRead

from conftest import MUSTANG, USER, FakeApi, make_car


@pytest.fixture
def api():
    return FakeApi()


@pytest.mark.asyncio
async def test_car_model_request_runs_effect(api):
    model, effect = update(CarModelRequest(slug="mustang"), init, USER, api=api)
    assert model.car_model is None
    assert api.calls == []

    follow_up = await effect
    assert isinstance(follow_up, CarModelLoad)
    assert follow_up.car_model.slug == "mustang"
    assert api.calls == [("request_car_model", "mustang", USER)]


def test_car_model_request_already_loaded(api):
    loaded = Model(car_model=CarModelRead.model_validate(MUSTANG))
    result = update(CarModelRequest(slug="mustang"), loaded, USER, api=api)
    assert result is loaded
    assert api.calls == []


def test_car_model_request_other_slug_clears_model(api):
    loaded = Model(car_model=CarModelRead.model_validate(MUSTANG))
    model, effect = update(CarModelRequest(slug="camaro"), loaded, USER, api=api)
    effect.close()
    assert model.car_model is None


def test_car_model_load(api):
    car_model = CarModelRead.model_validate(MUSTANG)
    model = update(CarModelLoad(slug="mustang", car_model=car_model), init, USER, api=api)
    assert model.car_model is car_model
    assert model.garage_cars is None


@pytest.mark.asyncio
async def test_garage_request_and_load(api):
    model, effect = update(GarageRequest(), init, USER, api=api)
    assert model is init
    follow_up = await effect
    assert isinstance(follow_up, GarageLoad)

    model = update(follow_up, model, USER, api=api)
    assert [c.id for c in model.garage_cars] == ["a1"]


def test_garage_saved_appends_new_car(api):
    model = Model(garage_cars=(make_car("a1"), make_car("b2")))
    model = update(GarageSaved(car=make_car("c3")), model, USER, api=api)
    assert [c.id for c in model.garage_cars] == ["a1", "b2", "c3"]


def test_garage_saved_replaces_in_place(api):
    model = Model(garage_cars=(make_car("a1"), make_car("b2"), make_car("c3")))
    model = update(GarageSaved(car=make_car("b2", nickname="Eleanor")), model, USER, api=api)
    assert [c.id for c in model.garage_cars] == ["a1", "b2", "c3"]
    assert model.garage_cars[1].nickname == "Eleanor"


def test_garage_saved_before_garage_loaded(api):
    model = update(GarageSaved(car=make_car("a1")), init, USER, api=api)
    assert [c.id for c in model.garage_cars] == ["a1"]


@pytest.mark.asyncio
async def test_garage_save_effect(api):
    model, effect = update(GarageSave(car=make_car(None)), init, USER, api=api)
    assert model is init
    follow_up = await effect
    assert isinstance(follow_up, GarageSaved)
    assert follow_up.car.id == "new1"


@pytest.mark.asyncio
async def test_garage_delete(api):
    model = Model(garage_cars=(make_car("a1"), make_car("b2")))
    same, effect = update(GarageDelete(id="a1"), model, USER, api=api)
    assert same is model

    follow_up = await effect
    assert follow_up == GarageDeleted(id="a1")
    model = update(follow_up, model, USER, api=api)
    assert [c.id for c in model.garage_cars] == ["b2"]


def test_unknown_message(api):
    @dataclass(frozen=True)
    class Bogus:
        kind = "garage/bogus"

    with pytest.raises(UnhandledMessageError, match="garage/bogus"):
        update(Bogus(), init, USER, api=api)


def test_message_from_tuple():
    assert message_from_tuple("car-model/request", {"slug": "mustang"}) == CarModelRequest(slug="mustang")
    assert message_from_tuple("garage/request") == GarageRequest()

    seen = []
    message = message_from_tuple("garage/save", {"car": make_car(None)}, {"on_success": lambda: seen.append(1)})
    assert isinstance(message, GarageSave)
    message.on_success()
    assert seen == [1]

    with pytest.raises(UnhandledMessageError):
        message_from_tuple("garage/unknown", {})


def test_message_from_tuple_camel_case():
    message = message_from_tuple("car-model/load", {"slug": "mustang", "carModel": MUSTANG})
    assert isinstance(message, CarModelLoad)
    assert message.car_model.overview.body_style == "Coupe"

    car = make_car("a1").model_dump(by_alias=True)
    message = message_from_tuple("garage/load", {"cars": [car]})
    assert [c.id for c in message.cars] == ["a1"]

    failures = []
    message = message_from_tuple("garage/save", {"car": car}, {"onFailure": failures.append})
    assert message.car.id == "a1"
    assert message.on_failure is not None
