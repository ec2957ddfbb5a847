from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.enums import StoreBackend
from .database.bootstrap import apply_schema, list_tables
from .health.controller import register as register_health
from .logging_config import configure_logging
from .records.controller import register as register_records

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(settings=None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = build_container(settings=settings)
    app.extensions["hr_portal"] = container
    logger.info("HR portal API using %s store", container.backend.value)

    if container.backend == StoreBackend.MYSQL and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn, schema_path=SCHEMA_PATH)
        logger.info("Schema ready on %s (tables=%d)", container.conn.config.describe(), len(list_tables(container.conn)))

    register_health(app, container)
    register_records(app, container)

    return app
