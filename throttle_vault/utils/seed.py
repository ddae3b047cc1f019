"""
Seed du catalogue / Catalog seeding.
Charge les modeles depuis un fichier JSON au premier demarrage si le catalogue est vide.
Loads car models from a JSON file on first startup when the catalog is empty.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from throttle_vault.models.car_model import CarModel
from throttle_vault.schemas.car_model import CarModelCreate

logger = logging.getLogger("throttle_vault.seed")

DEFAULT_CATALOG_PATH = Path(__file__).with_name("catalog_seed.json")


async def seed_catalog(session: AsyncSession, path: str | Path | None = None) -> int:
    """Inserer le catalogue si vide / Insert the catalog when empty. Returns the number of models added."""
    count = await session.scalar(select(func.count(CarModel.id)))
    if count:
        logger.info("%d car model(s) already in catalog, seed skipped", count)
        return 0

    seed_path = Path(path) if path else DEFAULT_CATALOG_PATH
    if not seed_path.is_file():
        logger.warning("Catalog seed file %s not found, seed skipped", seed_path)
        return 0

    entries = json.loads(seed_path.read_text(encoding="utf-8"))
    added = 0
    for raw in entries:
        try:
            data = CarModelCreate.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Skipping invalid catalog entry %r: %s", raw.get("slug"), exc)
            continue
        dump = data.model_dump(by_alias=True, mode="json")
        session.add(CarModel(
            slug=data.slug,
            name=data.name,
            category=data.category,
            icon=data.icon,
            href=data.href,
            years=data.years,
            overview=dump["overview"],
            trims=dump["trims"],
            modifications=dump["modifications"],
            history=dump["history"],
            images=dump["images"],
        ))
        added += 1

    await session.commit()
    logger.info("Seeded %d car model(s) from %s", added, seed_path)
    return added
