"""Etat applicatif cote client / Client-side application model."""

from dataclasses import dataclass

from throttle_vault.schemas.car_model import CarModelRead
from throttle_vault.schemas.garage import GarageCarRead


@dataclass(frozen=True)
class Model:
    """Instantane remplace a chaque mise a jour / Snapshot replaced on every update.

    ``None`` means "not loaded yet"; views render a loading state for it.
    """
    car_model: CarModelRead | None = None
    garage_cars: tuple[GarageCarRead, ...] | None = None


init = Model()
