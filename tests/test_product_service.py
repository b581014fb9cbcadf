import pytest

from destinity_erp.errors import ErrorType, ServiceError
from destinity_erp.models import Product
from destinity_erp.services import ProductService


@pytest.fixture
def service(container, clock):
    return ProductService(container.product_repo, clock=clock)


def _error(func, *args):
    with pytest.raises(ServiceError) as exc:
        func(*args)
    return exc.value


def test_create_product(service, product_payload):
    dto = service.create_product(Product.from_payload(product_payload))

    assert dto.name == 'Sábana matrimonial'
    assert dto.price == 349.9
    assert dto.stock == 25
    assert dto.category == 'Blancos'
    assert dto.status == 'Disponible'
    assert service.get_product_by_id(dto.id) == dto


def test_malformed_payload_id_is_replaced(service, product_payload):
    product_payload['id'] = 'abc'
    dto = service.create_product(Product.from_payload(product_payload))
    assert dto.id != 'abc'
    assert service.get_product_by_id(dto.id).name == 'Sábana matrimonial'


def test_duplicate_product_name(service, product_payload):
    service.create_product(Product.from_payload(product_payload))
    error = _error(service.create_product, Product.from_payload(product_payload))
    assert error.type == ErrorType.DUPLICATED_KEY
    assert error.message == "Ya existe un producto con ese nombre."
    assert service.get_total_product_count() == 1


def test_invalid_product_not_stored(service, product_payload):
    product_payload['stock'] = 10
    error = _error(service.create_product, Product.from_payload(product_payload))
    assert error.type == ErrorType.BUSINESS_RULE
    assert service.get_total_product_count() == 0


def test_listing_and_filters(service, product_payload):
    service.create_product(Product.from_payload(product_payload))
    service.create_product(Product.from_payload(dict(
        product_payload, name='Café de Chiapas', category='Alimentos',
        description='Café molido 500 g', provider='Finca El Triunfo'
    )))

    assert len(service.get_all_products()) == 2
    assert len(service.get_all_products(1, 1)) == 1
    assert [p.name for p in service.get_products_by_category('ALIMENTOS')] == ['Café de Chiapas']
    assert [p.name for p in service.search_products('algodón')] == ['Sábana matrimonial']
    assert [p.name for p in service.search_products('triunfo')] == ['Café de Chiapas']

    assert _error(service.get_products_by_category, 'Electrónicos').type == ErrorType.NOT_FOUND
    assert _error(service.search_products, '').type == ErrorType.INVALID_INPUT


def test_empty_inventory(service):
    error = _error(service.get_all_products)
    assert error.type == ErrorType.NOT_FOUND
    assert error.message == "No hay productos en el inventario"


def test_identical_update_rejected(service, product_payload):
    dto = service.create_product(Product.from_payload(product_payload))
    payload = dict(product_payload, status='Disponible')

    error = _error(service.update_product, dto.id, Product.from_payload(payload))
    assert error.message == "No se detectaron cambios. El producto no fue modificado"


def test_update_product(service, container, product_payload):
    dto = service.create_product(Product.from_payload(product_payload))
    payload = dict(product_payload, status='Disponible', price=399.0, stock=40)

    updated = service.update_product(dto.id, Product.from_payload(payload))

    assert updated.price == 399.0
    assert updated.stock == 40
    stored = container.product_repo.find_by_id(dto.id)
    assert stored.updated_at > stored.created_at


def test_update_to_existing_name(service, product_payload):
    service.create_product(Product.from_payload(product_payload))
    other = service.create_product(Product.from_payload(dict(product_payload, name='Toalla de baño')))

    payload = dict(product_payload, status='Disponible')
    error = _error(service.update_product, other.id, Product.from_payload(payload))
    assert error.type == ErrorType.DUPLICATED_KEY


def test_update_validates_incoming(service, product_payload):
    dto = service.create_product(Product.from_payload(product_payload))
    payload = dict(product_payload, status='Disponible', stock=10.5)
    error = _error(service.update_product, dto.id, Product.from_payload(payload))
    assert "número entero" in error.message


def test_delete_product(service, product_payload):
    dto = service.create_product(Product.from_payload(product_payload))
    assert service.delete_product(dto.id) is True
    assert _error(service.get_product_by_id, dto.id).type == ErrorType.NOT_FOUND
    assert _error(service.delete_product, 'abc').type == ErrorType.NOT_FOUND
