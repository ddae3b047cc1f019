"""Schemas catalogue / Car model catalog schemas.

Les cles JSON sont en camelCase (bodyStyle, zeroToSixty, hpGain...).
JSON keys are camelCase; Python attributes stay snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SLUG_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_-]*$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# --- Nested content ---

class Overview(CamelModel):
    manufacturer: str = ""
    body_style: str = ""
    history: str = ""


class Trim(CamelModel):
    name: str
    engine: str | None = None
    horsepower: int | float | None = None
    torque: int | float | None = None
    zero_to_sixty: str | None = None  # ex. "~6.3 s"
    top_speed: str | None = None  # ex. "~130 mph"
    years: str | None = None


class Modification(CamelModel):
    name: str
    type: str | None = None
    hp_gain: str | None = None
    cost_range: str | None = None
    install: str | None = None


class CarImages(CamelModel):
    hero: str | None = None
    gallery: list[str] = []
    trims: dict[str, str] = {}  # nom de finition -> url / trim name -> url


# --- Car model ---

class CarModelBase(CamelModel):
    name: str = Field(min_length=1, max_length=150)
    category: str = Field(min_length=1, max_length=50)
    icon: str = Field(min_length=1, max_length=100)
    href: str = Field(min_length=1, max_length=255)
    years: str = Field(min_length=1, max_length=50)
    overview: Overview = Overview()
    trims: list[Trim] = []
    modifications: list[Modification] = []
    history: list[str] = []
    images: CarImages | None = None


class CarModelCreate(CarModelBase):
    slug: str = Field(min_length=1, max_length=100, pattern=SLUG_PATTERN)


class CarModelUpdate(CarModelBase):
    """Remplacement complet ; le slug vient du chemin / Full replacement; slug comes from the path."""
    slug: str | None = None


class CarModelRead(CarModelBase):
    slug: str


class CarModelSummary(CamelModel):
    """Vue catalogue allegee / Lightweight catalog entry."""
    slug: str
    name: str
    category: str
    icon: str
    href: str
    years: str
    image: str | None = None
