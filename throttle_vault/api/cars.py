"""Routes catalogue / Car model catalog routes.

Lecture publique, ecriture authentifiee / public reads, authenticated writes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from throttle_vault.database import get_db
from throttle_vault.models.car_model import CarModel
from throttle_vault.models.garage_car import GarageCar
from throttle_vault.models.user import User
from throttle_vault.schemas.car_model import CarModelCreate, CarModelRead, CarModelSummary, CarModelUpdate
from throttle_vault.api.deps import get_current_user

logger = logging.getLogger("throttle_vault.api.cars")

router = APIRouter()


async def _get_by_slug(db: AsyncSession, slug: str) -> CarModel | None:
    result = await db.execute(select(CarModel).where(CarModel.slug == slug))
    return result.scalar_one_or_none()


def _document(data: CarModelCreate | CarModelUpdate) -> dict:
    """Champs persistes, imbriques en camelCase / Persisted fields, nested keys in camelCase."""
    dump = data.model_dump(by_alias=True, exclude={"slug"}, mode="json")
    return {
        "name": dump["name"],
        "category": dump["category"],
        "icon": dump["icon"],
        "href": dump["href"],
        "years": dump["years"],
        "overview": dump["overview"],
        "trims": dump["trims"],
        "modifications": dump["modifications"],
        "history": dump["history"],
        "images": dump["images"],
    }


@router.get("", response_model=list[CarModelSummary])
async def list_car_models(db: AsyncSession = Depends(get_db)):
    """Lister le catalogue / List catalog entries."""
    result = await db.execute(select(CarModel).order_by(CarModel.name))
    return [
        CarModelSummary(
            slug=m.slug,
            name=m.name,
            category=m.category,
            icon=m.icon,
            href=m.href,
            years=m.years,
            image=m.hero_image,
        )
        for m in result.scalars().all()
    ]


@router.get("/{slug}", response_model=CarModelRead)
async def get_car_model(slug: str, db: AsyncSession = Depends(get_db)):
    """Voir un modele / Get a car model."""
    car_model = await _get_by_slug(db, slug)
    if car_model is None:
        raise HTTPException(status_code=404, detail=f'Car "{slug}" not found')
    return car_model


@router.post("", response_model=CarModelRead, status_code=201)
async def create_car_model(
    data: CarModelCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Creer un modele / Create a car model. Slug deja pris -> 409."""
    if await _get_by_slug(db, data.slug) is not None:
        raise HTTPException(status_code=409, detail=f'Car "{data.slug}" already exists')

    car_model = CarModel(slug=data.slug, **_document(data))
    db.add(car_model)
    try:
        await db.flush()
    except IntegrityError:
        # Creation concurrente du meme slug / concurrent create of the same slug
        await db.rollback()
        raise HTTPException(status_code=409, detail=f'Car "{data.slug}" already exists')
    await db.refresh(car_model)
    logger.info("Car model %s created by %s", car_model.slug, user.username)
    return car_model


@router.put("/{slug}", response_model=CarModelRead)
async def update_car_model(
    slug: str,
    data: CarModelUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Remplacer un modele / Replace a car model."""
    car_model = await _get_by_slug(db, slug)
    if car_model is None:
        raise HTTPException(status_code=404, detail=f'Car "{slug}" not found')

    for key, value in _document(data).items():
        setattr(car_model, key, value)

    await db.flush()
    await db.refresh(car_model)
    logger.info("Car model %s updated by %s", slug, user.username)
    return car_model


@router.delete("/{slug}", status_code=204)
async def delete_car_model(
    slug: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Supprimer un modele / Delete a car model.

    Les voitures du garage qui le referencent sont conservees (modelName denormalise).
    Garage cars referencing it are kept; they carry a denormalized modelName.
    """
    car_model = await _get_by_slug(db, slug)
    if car_model is None:
        raise HTTPException(status_code=404, detail=f'Car "{slug}" not found')

    referencing = await db.scalar(
        select(func.count(GarageCar.id)).where(GarageCar.model_slug == slug)
    )
    if referencing:
        logger.warning("Car model %s deleted while %d garage car(s) still reference it", slug, referencing)
    await db.delete(car_model)
    logger.info("Car model %s deleted by %s", slug, user.username)
