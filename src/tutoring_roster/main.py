from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import build_container
from .roster.controller import register as register_roster

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    seed = bool(getattr(settings, "SEED_DEMO_DATA", False))
    container = build_container(seed=seed)
    logger.info("settings=%s seeded=%s contexts=%s", settings_module, seed, ", ".join(container.roster_service.get_contexts()))

    register_roster(app, container)

    return app


def run() -> None:
    app = create_app()
    app.run(debug=app.config["DEBUG"])


if __name__ == "__main__":
    run()
