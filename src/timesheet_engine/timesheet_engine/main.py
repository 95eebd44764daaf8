from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import Container, build_container
from .core.exceptions import DomainError, DuplicateKeyError, InvalidTransitionError, NotFoundError
from .rules.controller import register as register_rule_sets
from .seed import load_seed
from .shifts.controller import register as register_shifts
from .timesheets.controller import register as register_timesheets

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (DuplicateKeyError, 409),
    (InvalidTransitionError, 409),
)


def _status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 422


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = _status_for(error)
        logger.info("%s %s: %s", status, error.kind, error)
        return jsonify({"error": {"kind": error.kind, "message": str(error)}}), status


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.debug("settings=%s", settings_module)

    if container is None:
        container = build_container(
            default_rule_set=getattr(settings, "DEFAULT_RULE_SET", None),
            fallback_shift=getattr(settings, "DEFAULT_SHIFT", None),
        )
        seed_path = getattr(settings, "SEED_PATH", "")
        if seed_path:
            load_seed(container, Path(seed_path))

    app.extensions["timesheet_container"] = container

    register_error_handlers(app)
    register_rule_sets(app, container)
    register_shifts(app, container)
    register_timesheets(app, container)

    return app
