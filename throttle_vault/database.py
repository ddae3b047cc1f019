"""
Connexion a la base de donnees / Database connection.
Supporte SQLite (dev) et un cluster heberge (prod) via SQLAlchemy 2.0 async.
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from throttle_vault.config import settings

logger = logging.getLogger("throttle_vault.database")

DATABASE_URL = settings.database_url
_is_sqlite = DATABASE_URL.startswith("sqlite")

# Configuration moteur / Engine configuration
_engine_kwargs: dict = {
    "echo": False,
}

# Cluster heberge : pool de connexions / Hosted cluster: connection pooling
if not _is_sqlite:
    _engine_kwargs.update({
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    })

engine = create_async_engine(DATABASE_URL, **_engine_kwargs)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    """Dependance FastAPI pour obtenir une session DB / FastAPI dependency for DB session."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Creer les tables au demarrage / Create tables on startup."""
    # Enregistrer les modeles sur Base.metadata / Register models on Base.metadata
    import throttle_vault.models  # noqa: F401

    logger.info("Connecting to database at %s", settings.database_label)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    # Ajouter les colonnes manquantes sur tables existantes /
    # Add missing columns on existing tables
    await _migrate_missing_columns()


async def _migrate_missing_columns():
    """Verifier et ajouter les colonnes manquantes / Check and add missing columns via ALTER TABLE.

    Supporte SQLite (PRAGMA) et PostgreSQL (information_schema).
    """
    async with engine.begin() as conn:
        for table in Base.metadata.sorted_tables:
            # Detecter les colonnes existantes / Detect existing columns
            if _is_sqlite:
                result = await conn.execute(text(f"PRAGMA table_info('{table.name}')"))
                existing_cols = {row[1] for row in result.fetchall()}
            else:
                result = await conn.execute(text(
                    "SELECT column_name FROM information_schema.columns "
                    "WHERE table_name = :table_name AND table_schema = 'public'"
                ), {"table_name": table.name})
                existing_cols = {row[0] for row in result.fetchall()}

            for col in table.columns:
                if col.name not in existing_cols:
                    col_type = col.type.compile(dialect=engine.dialect)
                    col_type_str = str(col_type)

                    # Determiner la valeur par defaut / Determine default value
                    if col_type_str == "BOOLEAN":
                        default = "DEFAULT FALSE" if not _is_sqlite else "DEFAULT 0"
                    elif col_type_str.startswith("VARCHAR") or col_type_str == "TEXT":
                        default = "DEFAULT ''"
                    elif col_type_str in ("INTEGER", "BIGINT"):
                        default = "DEFAULT 0"
                    else:
                        default = ""

                    await conn.execute(text(
                        f'ALTER TABLE "{table.name}" ADD COLUMN "{col.name}" {col_type} {default}'
                    ))
                    logger.info("Added column %s.%s (%s)", table.name, col.name, col_type)
