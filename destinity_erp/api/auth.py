# ==============================================================================
# RUTAS DE AUTENTICACIÓN
# ==============================================================================

from flask import Blueprint, jsonify

from destinity_erp.api import get_container, json_body

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.post('/login')
def login():
    """Recibe {email, password} y responde {token}."""
    body = json_body() or {}
    result = get_container().auth_service.login(body.get('email'), body.get('password'))
    return jsonify(result)
