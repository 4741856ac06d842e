# terra_server/config/flask_config.py
from flask import Flask

from terra_server.config.settings import settings


def configure_app(app: Flask) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.json.sort_keys = False
