"""Modele du catalogue / Catalog car model.

Un document par modele ; les structures imbriquees (fiche, finitions,
modifications, historique, images) sont stockees en colonnes JSON.
One document per model; nested structures live in JSON columns.
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from throttle_vault.database import Base


class CarModel(Base):
    """Modele de voiture du catalogue / Catalog car model."""
    __tablename__ = "car_models"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # --- Identification ---
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)  # muscle-car, suv, coupe, electric...
    icon: Mapped[str] = mapped_column(String(100), nullable=False)
    href: Mapped[str] = mapped_column(String(255), nullable=False)
    years: Mapped[str] = mapped_column(String(50), nullable=False)  # texte libre, ex. "2008-2023"

    # --- Contenu imbrique / Nested content ---
    overview: Mapped[dict] = mapped_column(JSON, default=dict)  # {manufacturer, bodyStyle, history}
    trims: Mapped[list] = mapped_column(JSON, default=list)
    modifications: Mapped[list] = mapped_column(JSON, default=list)
    history: Mapped[list] = mapped_column(JSON, default=list)
    images: Mapped[dict | None] = mapped_column(JSON)  # {hero, gallery[], trims{name: url}}

    @property
    def hero_image(self) -> str | None:
        if not self.images:
            return None
        return self.images.get("hero")

    def __repr__(self) -> str:
        return f"<CarModel {self.slug} - {self.name}>"
