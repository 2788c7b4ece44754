from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_config import configure_logging
from .container import build_container
from .core.constants import DEFAULT_BATCH_LIMIT, DEFAULT_LOOKBACK_DAYS
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .reconciliation.controller import register as register_reconciliation

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def load_settings():
    load_dotenv(override=False)
    settings_module = get_settings_module()
    return settings_module, importlib.import_module(settings_module)


def create_app() -> Flask:
    settings_module, settings = load_settings()
    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

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

    container = build_container(
        db_config=db_config,
        batch_limit=int(getattr(settings, "RECONCILIATION_BATCH_LIMIT", DEFAULT_BATCH_LIMIT)),
        lookback_days=int(getattr(settings, "RECONCILIATION_LOOKBACK_DAYS", DEFAULT_LOOKBACK_DAYS)),
    )

    register_reconciliation(app, container)

    return app
