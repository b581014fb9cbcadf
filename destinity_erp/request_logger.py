# ==============================================================================
# LOGGING Y TIEMPOS DE PETICIÓN
# ==============================================================================
# setup_logging():        handler de consola con formato legible (una vez)
# init_request_logging(): hooks before/after_request que registran método,
#                         ruta, estatus y tiempo. Las peticiones que superan
#                         el umbral se registran como WARNING.
# ==============================================================================

import logging
import time

from flask import Flask, g, request

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Umbral por defecto (en milisegundos)
THRESHOLD_WARNING = 300

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configura el logger raíz. Llamadas posteriores solo ajustan el nivel."""
    global _configured
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
    _configured = True


# ═══════════════════════════════════════════════════════════════════════════
# HOOKS PARA FLASK (before/after request)
# ═══════════════════════════════════════════════════════════════════════════

def init_request_logging(app: Flask, slow_ms: int = THRESHOLD_WARNING) -> None:
    """
    Registra los hooks de tiempo de petición en una app Flask.

    Uso:
        init_request_logging(app, settings.slow_request_ms)
    """

    @app.before_request
    def _start_timer():
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if not hasattr(g, 'start_time'):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000  # ms
        rule = str(request.url_rule) if request.url_rule else request.path

        if elapsed >= slow_ms:
            logger.warning(
                "Petición lenta %s %s (%s) -> %d en %.1f ms",
                request.method, request.path, rule, response.status_code, elapsed
            )
        else:
            logger.info(
                "%s %s -> %d en %.1f ms",
                request.method, request.path, response.status_code, elapsed
            )
        return response
