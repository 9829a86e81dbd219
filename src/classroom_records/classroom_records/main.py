from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module, load_settings

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .grades.controller import register as register_grades
from .identity.controller import register as register_identity
from .imports.controller import register as register_imports
from .permissions.controller import register as register_permissions
from .reports.controller import register as register_reports
from .students.controller import register as register_students

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory. Pass ``container`` to skip settings-driven wiring (tests)."""
    load_dotenv(override=False)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["JSON_AS_ASCII"] = False

    if container is None:
        backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            db_config = getattr(settings, "DB_CONFIG")
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info(
                "Schema ready on %s@%s/%s (tables=%s)",
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("database"),
                len(list_tables(db_config)),
            )
        container = build_container(settings)

    logger.debug("Settings module: %s", get_settings_module())

    register_error_handlers(app)
    register_identity(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_grades(app, container)
    register_permissions(app, container)
    register_imports(app, container)
    register_reports(app, container)

    return app
