# ==============================================================================
# APLICACIÓN FLASK - Punto de entrada
# ==============================================================================
# create_app() arma la aplicación con un AppContainer explícito:
#
#   settings = Settings.from_env()
#   app = create_app(settings)
#
# Ejecutar en desarrollo:
#   python -m destinity_erp.main
# En producción usar WSGI (gunicorn, waitress, etc.) con create_app().
# ==============================================================================

import atexit
import logging
from typing import Optional

from flask import Flask

from destinity_erp.api import EXTENSION_KEY
from destinity_erp.api.auth import auth_bp
from destinity_erp.api.error_handlers import register_error_handlers
from destinity_erp.api.products import products_bp
from destinity_erp.api.sales import sales_bp
from destinity_erp.api.users import users_bp
from destinity_erp.app_container import AppContainer
from destinity_erp.config import Settings
from destinity_erp.request_logger import init_request_logging, setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, container: Optional[AppContainer] = None) -> Flask:
    """
    Construye la aplicación Flask.

    Args:
        settings: Configuración (por defecto se lee del entorno)
        container: Contenedor ya construido (tests); si no se pasa, la app
            crea uno y lo cierra al terminar el intérprete

    Returns:
        Aplicación Flask lista para servir
    """
    if settings is None:
        settings = container.settings if container is not None else Settings.from_env()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    if container is None:
        container = AppContainer(settings)
        atexit.register(container.close)
    app.extensions[EXTENSION_KEY] = container

    register_error_handlers(app)
    init_request_logging(app, settings.slow_request_ms)

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(sales_bp)

    logger.info(
        "Aplicación iniciada (datos: %s, producción: %s)",
        settings.data_dir, settings.production_mode
    )
    return app


if __name__ == "__main__":
    _settings = Settings.from_env()
    _app = create_app(_settings)

    if not _settings.debug:
        logger.info("Servidor iniciado en http://%s:%d", _settings.host, _settings.port)

    _app.run(host=_settings.host, port=_settings.port, debug=_settings.debug)
