"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que create_all les détecte.
Import all models here so create_all can detect them.
"""

from throttle_vault.models.car_model import CarModel
from throttle_vault.models.garage_car import GarageCar, GarageNote, ServiceLog
from throttle_vault.models.user import User

__all__ = [
    "CarModel",
    "GarageCar",
    "GarageNote",
    "ServiceLog",
    "User",
]
