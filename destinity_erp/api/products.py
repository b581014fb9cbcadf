# ==============================================================================
# RUTAS DE INVENTARIO (/products)
# ==============================================================================

from flask import Blueprint, jsonify, request

from destinity_erp.api import get_container, json_body, message, paged_response, to_json
from destinity_erp.models import Product
from destinity_erp.services import normalize_pagination

products_bp = Blueprint('products', __name__, url_prefix='/products')


@products_bp.post('')
def create_product():
    get_container().product_service.create_product(Product.from_payload(json_body()))
    return message("Producto creado satisfactoriamente", 201)


@products_bp.get('/all')
def get_all_products():
    service = get_container().product_service
    page, size = normalize_pagination(
        request.args.get('page', type=int), request.args.get('size', type=int)
    )
    products = service.get_all_products(page, size)
    return paged_response(products, service.get_total_product_count(), page, size)


@products_bp.get('')
def get_product_by_id():
    product = get_container().product_service.get_product_by_id(request.args.get('id'))
    return jsonify(product.to_dict())


@products_bp.get('/category')
def get_products_by_category():
    products = get_container().product_service.get_products_by_category(request.args.get('category'))
    return jsonify(to_json(products))


@products_bp.get('/search')
def search_products():
    products = get_container().product_service.search_products(request.args.get('name'))
    return jsonify(to_json(products))


@products_bp.put('/<product_id>')
def update_product(product_id):
    get_container().product_service.update_product(product_id, Product.from_payload(json_body()))
    return message("Producto actualizado satisfactoriamente")


@products_bp.delete('/<product_id>')
def delete_product(product_id):
    get_container().product_service.delete_product(product_id)
    return message("Producto eliminado satisfactoriamente")
