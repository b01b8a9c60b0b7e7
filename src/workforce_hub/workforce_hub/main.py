from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.log_config import configure_logging
from .common.web import register_error_handlers
from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .metrics.controller import register as register_metrics
from .organizations.controller import register as register_organizations
from .tasks.controller import register as register_tasks
from .teams.controller import register as register_teams
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        container = build_container(
            summary_config={
                "api_key": getattr(settings, "SUMMARY_API_KEY", None),
                "model": getattr(settings, "SUMMARY_MODEL", None),
                "api_url": getattr(settings, "SUMMARY_API_URL", None),
                "timeout": getattr(settings, "SUMMARY_TIMEOUT_SECONDS", 30.0),
            },
            seed_demo=bool(getattr(settings, "AUTO_SEED_DEMO", False)),
        )
    app.extensions["workforce_hub"] = container

    register_auth(app, container)
    register_organizations(app, container)
    register_users(app, container)
    register_teams(app, container)
    register_tasks(app, container)
    register_attendance(app, container)
    register_metrics(app, container)
    register_error_handlers(app)

    logger.info("App ready (settings=%s, entities seeded=%s)", settings_module, len(container.store.users) > 0)
    return app
