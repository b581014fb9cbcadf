# ==============================================================================
# RUTAS DE USUARIOS (/users)
# ==============================================================================
# POST   /users/employees                      Alta de empleado
# POST   /users/providers                      Alta de proveedor
# GET    /users/all?page&size&type_user        Lista paginada
# GET    /users?id=                            Por ID
# GET    /users/email?email=                   Por correo
# GET    /users/status?status&type_user        Por estatus
# GET    /users/department?department=         Empleados por departamento
# GET    /users/service?service=               Proveedores por servicio
# GET    /users/search?textSearch=             Búsqueda de empleados
# PUT    /users/<id>                           Actualizar
# DELETE /users/<id>                           Eliminar
# ==============================================================================

from flask import Blueprint, jsonify, request

from destinity_erp.api import get_container, json_body, message, paged_response, to_json
from destinity_erp.models import User
from destinity_erp.services import normalize_pagination

users_bp = Blueprint('users', __name__, url_prefix='/users')


@users_bp.post('/employees')
def create_employee():
    get_container().user_service.create_employee(User.from_payload(json_body()))
    return message("Empleado creado satisfactoriamente", 201)


@users_bp.post('/providers')
def create_provider():
    get_container().user_service.create_provider(User.from_payload(json_body()))
    return message("Proveedor creado satisfactoriamente", 201)


@users_bp.get('/all')
def get_all_users():
    service = get_container().user_service
    page, size = normalize_pagination(
        request.args.get('page', type=int), request.args.get('size', type=int)
    )
    user_type = request.args.get('type_user')
    users = service.get_all_users(page, size, user_type)
    return paged_response(users, service.count_users_by_type(user_type), page, size)


@users_bp.get('')
def get_user_by_id():
    return jsonify(get_container().user_service.get_user_by_id(request.args.get('id')).to_dict())


@users_bp.get('/email')
def get_user_by_email():
    user = get_container().user_service.get_user_by_email(request.args.get('email'))
    return jsonify(user.to_dict())


@users_bp.get('/status')
def get_users_by_status():
    users = get_container().user_service.get_users_by_status(
        request.args.get('status'), request.args.get('type_user')
    )
    return jsonify(to_json(users))


@users_bp.get('/department')
def get_employees_by_department():
    users = get_container().user_service.get_employees_by_department(request.args.get('department'))
    return jsonify(to_json(users))


@users_bp.get('/service')
def get_providers_by_service():
    users = get_container().user_service.get_providers_by_service(request.args.get('service'))
    return jsonify(to_json(users))


@users_bp.get('/search')
def search_employees():
    users = get_container().user_service.search_employees(request.args.get('textSearch'))
    return jsonify(to_json(users))


@users_bp.put('/<user_id>')
def update_user(user_id):
    get_container().user_service.update_user(user_id, User.from_payload(json_body()))
    return message("Usuario actualizado satisfactoriamente")


@users_bp.delete('/<user_id>')
def delete_user(user_id):
    get_container().user_service.delete_user(user_id)
    return message("Usuario eliminado satisfactoriamente")
