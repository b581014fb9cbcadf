# ==============================================================================
# RUTAS DE VENTAS (/sales)
# ==============================================================================

from flask import Blueprint, jsonify, request

from destinity_erp.api import get_container, json_body, message, paged_response, to_json
from destinity_erp.models import Sale
from destinity_erp.services import normalize_pagination

sales_bp = Blueprint('sales', __name__, url_prefix='/sales')


@sales_bp.post('')
def create_sale():
    get_container().sale_service.create_sale(Sale.from_payload(json_body()))
    return message("Venta creada satisfactoriamente", 201)


@sales_bp.get('/all')
def get_all_sales():
    service = get_container().sale_service
    page, size = normalize_pagination(
        request.args.get('page', type=int), request.args.get('size', type=int)
    )
    sales = service.get_all_sales(page, size)
    return paged_response(sales, service.get_total_sale_count(), page, size)


@sales_bp.get('')
def get_sale_by_id():
    return jsonify(get_container().sale_service.get_sale_by_id(request.args.get('id')).to_dict())


@sales_bp.get('/status')
def get_sales_by_status():
    sales = get_container().sale_service.get_sales_by_status(request.args.get('status'))
    return jsonify(to_json(sales))


@sales_bp.get('/search')
def search_sales():
    sales = get_container().sale_service.search_sales(request.args.get('name'))
    return jsonify(to_json(sales))


@sales_bp.put('/<sale_id>')
def update_sale(sale_id):
    get_container().sale_service.update_sale(sale_id, Sale.from_payload(json_body()))
    return message("Venta actualizada satisfactoriamente")


@sales_bp.delete('/<sale_id>')
def delete_sale(sale_id):
    get_container().sale_service.delete_sale(sale_id)
    return message("Venta eliminada satisfactoriamente")
