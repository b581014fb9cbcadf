import copy
from datetime import datetime

import pytest

from destinity_erp.errors import ErrorType, ServiceError
from destinity_erp.models import EmployeeData, Product, Sale, User
from destinity_erp.services.changes import (
    apply_product_changes,
    apply_sale_changes,
    apply_user_changes,
    is_same_product,
    is_same_sale,
    is_same_user,
)


@pytest.fixture
def stored_employee(employee_payload):
    user = User.from_payload(employee_payload)
    user.id = 'a' * 24
    user.password = 'scrypt:hash-guardado'
    user.status = 'Activo'
    user.created_at = datetime(2024, 1, 10, 8, 30)
    return user


def test_copies_are_the_same(stored_employee, provider_payload, product_payload, sale_payload):
    provider = User.from_payload(provider_payload)
    product = Product.from_payload(product_payload)
    sale = Sale.from_payload(sale_payload)

    assert is_same_user(stored_employee, copy.deepcopy(stored_employee))
    assert is_same_user(provider, copy.deepcopy(provider))
    assert is_same_product(product, copy.deepcopy(product))
    assert is_same_sale(sale, copy.deepcopy(sale))


def test_user_field_change_detected(stored_employee):
    incoming = copy.deepcopy(stored_employee)
    incoming.profile.salary = 19000
    assert not is_same_user(incoming, stored_employee)


def test_user_kind_change_detected(stored_employee, provider_payload):
    incoming = User.from_payload(provider_payload)
    incoming.first_name = stored_employee.first_name
    incoming.last_name = stored_employee.last_name
    incoming.middle_name = stored_employee.middle_name
    incoming.email = stored_employee.email
    incoming.status = stored_employee.status
    assert not is_same_user(incoming, stored_employee)


def test_password_is_not_compared(stored_employee):
    incoming = copy.deepcopy(stored_employee)
    incoming.password = 'otra-contraseña'
    assert is_same_user(incoming, stored_employee)


def test_apply_user_changes_keeps_identity(stored_employee):
    incoming = copy.deepcopy(stored_employee)
    incoming.id = 'b' * 24
    incoming.password = 'nueva-contraseña'
    incoming.created_at = datetime(2030, 1, 1)
    incoming.first_name = 'Ana María'
    incoming.profile.department = 'Compras'

    apply_user_changes(stored_employee, incoming)

    assert stored_employee.first_name == 'Ana María'
    assert stored_employee.profile.department == 'Compras'
    assert stored_employee.id == 'a' * 24
    assert stored_employee.password == 'scrypt:hash-guardado'
    assert stored_employee.created_at == datetime(2024, 1, 10, 8, 30)


def test_cross_kind_merge_leaves_target_untouched(stored_employee, provider_payload):
    before = copy.deepcopy(stored_employee)
    incoming = User.from_payload(provider_payload)

    with pytest.raises(ServiceError) as exc:
        apply_user_changes(stored_employee, incoming)

    assert exc.value.type == ErrorType.BUSINESS_RULE
    assert exc.value.message == "No se puede aplicar cambios entre tipos de usuario diferentes."
    assert stored_employee == before
    assert isinstance(stored_employee.profile, EmployeeData)


def test_product_changes(product_payload):
    stored = Product.from_payload(product_payload)
    stored.id = 'c' * 24
    incoming = Product.from_payload(dict(product_payload, price=399.0, stock=30))

    assert not is_same_product(incoming, stored)
    apply_product_changes(stored, incoming)

    assert stored.price == 399.0
    assert stored.stock == 30
    assert stored.id == 'c' * 24
    assert is_same_product(incoming, stored)


def test_sale_compares_status_only(sale_payload):
    stored = Sale.from_payload(dict(sale_payload, status='Completada'))
    incoming = Sale.from_payload({'status': 'Completada', 'paymentMethod': 'Efectivo'})
    assert is_same_sale(incoming, stored)

    incoming.status = 'Cancelada'
    apply_sale_changes(stored, incoming)
    assert stored.status == 'Cancelada'
    assert stored.payment_method == 'Tarjeta'
