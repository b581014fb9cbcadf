# ==============================================================================
# MANEJADORES DE ERRORES HTTP
# ==============================================================================
# ServiceError      → estatus según su tipo, {"message", "type"}
# HTTPException     → se respeta la respuesta de Flask (404 de ruta, 405...)
# Exception         → 500 {"message": "Error interno inesperado",
#                          "type": "UNEXPECTED"}, sin detalles internos
# ==============================================================================

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from destinity_erp.errors import ServiceError

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = {'message': 'Error interno inesperado', 'type': 'UNEXPECTED'}


def register_error_handlers(app: Flask) -> None:
    """Registra los manejadores globales de errores."""

    @app.errorhandler(ServiceError)
    def _service_error(exc: ServiceError):
        logger.warning("[%s] %s (%s %s)", exc.type.value, exc.message, request.method, request.path)
        return jsonify(exc.to_response()), exc.type.http_status

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _unexpected_error(exc: Exception):
        logger.error("Error inesperado en %s %s: %s", request.method, request.path, exc, exc_info=True)
        return jsonify(UNEXPECTED_RESPONSE), 500
