# src/threadboard/scripts/migrate.py
from __future__ import annotations

import os

from alembic import command
from alembic.config import Config

from threadboard.core.settings import settings

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), "..", "..", "..")


def run_upgrade_head() -> None:
    # Point Alembic at the migrations folder
    cfg = Config(os.path.join(PROJECT_ROOT, "migrations", "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    cfg.set_main_option(
        "script_location", os.path.abspath(os.path.join(PROJECT_ROOT, "migrations"))
    )
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head()
