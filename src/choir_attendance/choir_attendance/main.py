from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_config import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .attendance.controller import register as register_attendance
from .importing.controller import register as register_importing
from .members.controller import register as register_members
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory. Pass a prebuilt container to skip MySQL wiring (tests)."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.json.ensure_ascii = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("demo roster ready")

        container = build_container(db_config=db_config, settings=settings)

    register_members(app, container)
    register_attendance(app, container)
    register_importing(app, container)
    register_reports(app, container)

    return app
