from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.settings import PayrollSettings
from .database.connection import DBConfig
from .leave.controller import register as register_leave
from .payroll.controller import register as register_payroll
from .payslip.controller import register as register_payslips


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        container = build_container(db_config=db_config, settings=PayrollSettings.from_module(settings))

    if app.config["DEBUG"]:
        app.logger.info(
            "[payroll-system] settings=%s db=%s attribution=%s",
            settings_module,
            DBConfig.from_mapping(db_config).describe(),
            container.settings.leave_attribution.value,
        )

    register_leave(app, container)
    register_payroll(app, container)
    register_payslips(app, container)

    return app
