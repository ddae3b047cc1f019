"""Modeles Garage / Garage models.

Voiture possedee par un utilisateur, avec notes et carnet d'entretien.
Owned car with its notes and service logs. Notes and service logs are child
rows kept in insertion order, so a single entry is added, edited or removed
without rewriting the whole list.

``username`` and ``model_slug`` are plain columns, not foreign keys: ownership
and catalog references are checked in the API layer.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from throttle_vault.database import Base


def new_id() -> str:
    """Identifiant document / Document identifier (32 hex chars)."""
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class GarageCar(Base):
    """Voiture du garage / Garage car."""
    __tablename__ = "garage_cars"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # --- Reference catalogue (denormalisee) / Catalog reference (denormalized) ---
    model_slug: Mapped[str] = mapped_column(String(100), nullable=False)
    model_name: Mapped[str] = mapped_column(String(150), nullable=False)

    nickname: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    trim: Mapped[str] = mapped_column(String(100), nullable=False)
    mileage: Mapped[int | None] = mapped_column(Integer)
    date_added: Mapped[str] = mapped_column(String(32), default=utc_now_iso)  # ISO 8601

    # --- Relations ---
    notes: Mapped[list["GarageNote"]] = relationship(
        back_populates="car",
        order_by="GarageNote.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    service_logs: Mapped[list["ServiceLog"]] = relationship(
        back_populates="car",
        order_by="ServiceLog.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def find_note(self, note_id: str) -> "GarageNote | None":
        return next((n for n in self.notes if n.id == note_id), None)

    def find_service_log(self, log_id: str) -> "ServiceLog | None":
        return next((log for log in self.service_logs if log.id == log_id), None)

    def __repr__(self) -> str:
        return f"<GarageCar {self.id} {self.username}:{self.nickname}>"


class GarageNote(Base):
    """Note libre datee / Dated free-text note."""
    __tablename__ = "garage_notes"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    car_id: Mapped[str] = mapped_column(ForeignKey("garage_cars.id", ondelete="CASCADE"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0)
    date: Mapped[str] = mapped_column(String(32), default=utc_now_iso)  # ISO 8601
    content: Mapped[str] = mapped_column(Text, nullable=False)

    car: Mapped["GarageCar"] = relationship(back_populates="notes")

    def __repr__(self) -> str:
        return f"<GarageNote {self.id} car={self.car_id}>"


class ServiceLog(Base):
    """Entree du carnet d'entretien / Service log entry."""
    __tablename__ = "garage_service_logs"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    car_id: Mapped[str] = mapped_column(ForeignKey("garage_cars.id", ondelete="CASCADE"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0)
    date: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    service: Mapped[str] = mapped_column(String(150), nullable=False)
    mileage: Mapped[int | None] = mapped_column(Integer)
    cost: Mapped[float | None] = mapped_column(Numeric(10, 2))
    notes: Mapped[str | None] = mapped_column(Text)

    car: Mapped["GarageCar"] = relationship(back_populates="service_logs")

    def __repr__(self) -> str:
        return f"<ServiceLog {self.id} {self.service}>"
