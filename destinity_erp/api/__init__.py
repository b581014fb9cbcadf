# ==============================================================================
# CAPA HTTP - Blueprints de Flask
# ==============================================================================
# Las rutas solo orquestan: request → servicio → respuesta.
# Toda la lógica de negocio vive en services/.
# ==============================================================================

from typing import Any, Dict, List, Optional

from flask import current_app, jsonify, request

from destinity_erp.errors import ErrorType, ServiceError

EXTENSION_KEY = 'destinity_erp'


def get_container():
    """AppContainer registrado en la app actual."""
    return current_app.extensions[EXTENSION_KEY]


def json_body() -> Optional[Dict[str, Any]]:
    """
    Cuerpo JSON de la petición.

    Returns:
        Diccionario recibido, o None si el cuerpo viene vacío

    Raises:
        ServiceError: INVALID_INPUT si el cuerpo no es un objeto JSON
    """
    data = request.get_json(silent=True)
    if data is None:
        if request.get_data():
            raise ServiceError(ErrorType.INVALID_INPUT, "El cuerpo de la petición no es JSON válido")
        return None
    if not isinstance(data, dict):
        raise ServiceError(ErrorType.INVALID_INPUT, "El cuerpo de la petición debe ser un objeto JSON")
    return data


def message(text: str, status: int = 200):
    return jsonify({'message': text}), status


def to_json(items: List[Any]) -> List[Dict[str, Any]]:
    return [item.to_dict() for item in items]


def paged_response(items: List[Any], total: int, page: int, size: int):
    """Lista paginada con encabezados X-Total-Count / X-Page / X-Page-Size."""
    response = jsonify(to_json(items))
    response.headers['X-Total-Count'] = str(total)
    response.headers['X-Page'] = str(page)
    response.headers['X-Page-Size'] = str(size)
    return response
