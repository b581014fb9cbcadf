from datetime import datetime, timedelta

import pytest

from destinity_erp.app_container import AppContainer
from destinity_erp.config import Settings
from destinity_erp.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=str(tmp_path / 'data'), secret_key='test-secret-key')


@pytest.fixture
def container(settings):
    with AppContainer(settings) as c:
        yield c


@pytest.fixture
def client(container):
    app = create_app(container=container)
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def clock():
    """Reloj que avanza un minuto en cada llamada."""
    current = [datetime(2024, 3, 1, 9, 0, 0)]

    def now():
        current[0] += timedelta(minutes=1)
        return current[0]

    return now


@pytest.fixture
def employee_payload():
    return {
        'firstName': 'Ana',
        'lastName': 'López',
        'middleName': 'Ruiz',
        'email': 'ana.lopez@destinity.mx',
        'password': 'secreto123',
        'employeeData': {'role': 'Gerente', 'department': 'Ventas', 'salary': 18000.5},
    }


@pytest.fixture
def provider_payload():
    return {
        'firstName': 'Carlos',
        'lastName': 'Méndez',
        'email': 'carlos@proveedora.mx',
        'password': 'proveedor1',
        'providerData': {
            'company': 'Textiles del Norte',
            'serviceType': 'Telas',
            'phone': '5512345678',
        },
    }


@pytest.fixture
def product_payload():
    return {
        'name': 'Sábana matrimonial',
        'price': 349.9,
        'stock': 25,
        'category': 'Blancos',
        'description': 'Sábana de algodón 100%',
        'image': 'sabana.png',
        'provider': 'Textiles del Norte',
    }


@pytest.fixture
def sale_payload():
    return {
        'customerInfo': {'id': None, 'name': 'María Pérez', 'email': 'maria@correo.mx'},
        'productSold': {'id': None, 'name': 'Sábana matrimonial', 'price': 349.9, 'quantity': 2},
        'paymentMethod': 'Tarjeta',
        'totalAmount': 699.8,
    }
