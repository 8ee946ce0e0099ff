"""Alembic environment.

Migrations run synchronously. ``ALEMBIC_DATABASE_URL`` takes priority over
``DATABASE_URL`` so migrations can use an owner role while the app runs
with a restricted one.
"""

from __future__ import annotations

import os

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine.url import make_url

from app.core.database import Base
from app.models import tables  # noqa: F401

config = context.config
target_metadata = Base.metadata


def _sync_url() -> str:
    raw = os.getenv("ALEMBIC_DATABASE_URL") or os.getenv("DATABASE_URL") or "sqlite:///./app.db"
    url = make_url(raw)
    # Alembic drives a sync connection
    if url.drivername.startswith("postgres"):
        url = url.set(drivername="postgresql+psycopg")
    elif url.drivername.startswith("sqlite"):
        url = url.set(drivername="sqlite")
    return url.render_as_string(hide_password=False)


def run_migrations_offline() -> None:
    context.configure(url=_sync_url(), target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = _sync_url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
