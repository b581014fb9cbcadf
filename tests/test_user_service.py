import pytest

from destinity_erp.errors import ErrorType, ServiceError
from destinity_erp.models import EmployeeData, User
from destinity_erp.security import check_password
from destinity_erp.services import UserService


@pytest.fixture
def service(container, clock):
    return UserService(container.user_repo, clock=clock)


def _error(func, *args):
    with pytest.raises(ServiceError) as exc:
        func(*args)
    return exc.value


def test_create_employee_applies_defaults(service, container, employee_payload):
    dto = service.create_employee(User.from_payload(employee_payload))

    assert dto.firstName == 'Ana'
    assert dto.lastName == 'López'
    assert dto.middleName == 'Ruiz'
    assert dto.email == 'ana.lopez@destinity.mx'
    assert dto.userType == 'employee'
    assert dto.role == 'Gerente'
    assert dto.department == 'Ventas'
    assert dto.status == 'Activo'
    assert dto.createdAt is not None
    assert dto.updatedAt is None

    stored = container.user_repo.find_by_id(dto.id)
    assert stored.password != 'secreto123'
    assert check_password(stored.password, 'secreto123')
    assert stored.profile == EmployeeData(role='Gerente', department='Ventas', salary=18000.5)


def test_provider_dto_hides_employee_fields(service, provider_payload):
    dto = service.create_provider(User.from_payload(provider_payload))
    assert dto.userType == 'provider'
    assert dto.role is None
    assert dto.department is None
    assert 'password' not in dto.to_dict()


def test_create_variant_must_match(service, employee_payload, provider_payload):
    error = _error(service.create_provider, User.from_payload(employee_payload))
    assert error.type == ErrorType.BUSINESS_RULE
    error = _error(service.create_employee, User.from_payload(provider_payload))
    assert error.type == ErrorType.BUSINESS_RULE


def test_create_empty_user(service):
    error = _error(service.create_user, None)
    assert error.message == "El usuario no puede estar vacio"


def test_duplicate_email(service, employee_payload):
    service.create_employee(User.from_payload(employee_payload))
    error = _error(service.create_employee, User.from_payload(employee_payload))
    assert error.type == ErrorType.DUPLICATED_KEY


def test_get_all_users_defaults_to_employees(service, employee_payload, provider_payload):
    service.create_employee(User.from_payload(employee_payload))
    service.create_provider(User.from_payload(provider_payload))

    employees = service.get_all_users()
    providers = service.get_all_users(0, 20, 'provider')

    assert [u.email for u in employees] == ['ana.lopez@destinity.mx']
    assert [u.email for u in providers] == ['carlos@proveedora.mx']
    assert service.get_total_user_count() == 2
    assert service.count_users_by_type('provider') == 1


def test_get_all_users_paginates(service, employee_payload):
    for i in range(3):
        payload = dict(employee_payload, email=f'empleado{i}@destinity.mx')
        service.create_employee(User.from_payload(payload))

    assert len(service.get_all_users(0, 2)) == 2
    assert len(service.get_all_users(1, 2)) == 1
    assert len(service.get_all_users(-4, 0)) == 3


def test_empty_listing_is_not_found(service):
    error = _error(service.get_all_users)
    assert error.type == ErrorType.NOT_FOUND
    assert error.message == "No hay usuarios registrados"


def test_lookup_by_id_and_email(service, employee_payload):
    dto = service.create_employee(User.from_payload(employee_payload))
    assert service.get_user_by_id(dto.id).email == dto.email
    assert service.get_user_by_email(dto.email).id == dto.id


def test_lookup_failures(service):
    assert _error(service.get_user_by_id, 'no-es-un-id').type == ErrorType.NOT_FOUND
    assert _error(service.get_user_by_id, '0' * 24).type == ErrorType.NOT_FOUND
    assert _error(service.get_user_by_email, 'nadie@mx.com').type == ErrorType.NOT_FOUND

    error = _error(service.get_user_by_id, '  ')
    assert error.type == ErrorType.INVALID_INPUT
    assert error.message == "ID del usuario es requerido"


def test_filters_by_status_department_and_service(service, employee_payload, provider_payload):
    service.create_employee(User.from_payload(employee_payload))
    service.create_provider(User.from_payload(provider_payload))

    assert len(service.get_users_by_status('Activo')) == 1
    assert len(service.get_users_by_status('Activo', 'provider')) == 1
    assert service.get_employees_by_department('Ventas')[0].role == 'Gerente'
    assert service.get_providers_by_service('Telas')[0].email == 'carlos@proveedora.mx'

    assert _error(service.get_users_by_status, 'Baja').type == ErrorType.NOT_FOUND
    assert _error(service.get_providers_by_service, 'Ventas').type == ErrorType.NOT_FOUND
    assert _error(service.get_employees_by_department, '').type == ErrorType.INVALID_INPUT


def test_search_employees_only(service, employee_payload, provider_payload):
    service.create_employee(User.from_payload(employee_payload))
    service.create_provider(User.from_payload(provider_payload))

    assert [u.firstName for u in service.search_employees('lóp')] == ['Ana']
    assert [u.firstName for u in service.search_employees('DESTINITY')] == ['Ana']
    assert _error(service.search_employees, 'Carlos').type == ErrorType.NOT_FOUND


def test_identical_update_rejected(service, employee_payload):
    dto = service.create_employee(User.from_payload(employee_payload))
    payload = dict(employee_payload, status='Activo')

    error = _error(service.update_user, dto.id, User.from_payload(payload))
    assert error.type == ErrorType.BUSINESS_RULE
    assert error.message == "No se detectaron cambios. El usuario no fue modificado"


def test_update_refreshes_updated_at(service, container, employee_payload):
    dto = service.create_employee(User.from_payload(employee_payload))
    payload = dict(employee_payload, status='Activo', password='otraclave99')
    payload['employeeData'] = dict(employee_payload['employeeData'], department='Compras')

    updated = service.update_user(dto.id, User.from_payload(payload))

    assert updated.department == 'Compras'
    assert updated.createdAt == dto.createdAt
    assert updated.updatedAt > updated.createdAt
    stored = container.user_repo.find_by_id(dto.id)
    assert check_password(stored.password, 'secreto123')


def test_update_across_kinds_keeps_stored_user(service, container, employee_payload, provider_payload):
    dto = service.create_employee(User.from_payload(employee_payload))
    payload = dict(provider_payload, email=employee_payload['email'])

    error = _error(service.update_user, dto.id, User.from_payload(payload))

    assert error.type == ErrorType.BUSINESS_RULE
    stored = container.user_repo.find_by_id(dto.id)
    assert isinstance(stored.profile, EmployeeData)
    assert stored.first_name == 'Ana'


def test_update_missing_user(service, employee_payload):
    error = _error(service.update_user, '0' * 24, User.from_payload(employee_payload))
    assert error.type == ErrorType.NOT_FOUND


def test_delete_user(service, employee_payload):
    dto = service.create_employee(User.from_payload(employee_payload))
    assert service.delete_user(dto.id) is True
    assert _error(service.get_user_by_id, dto.id).type == ErrorType.NOT_FOUND
    assert _error(service.delete_user, dto.id).type == ErrorType.NOT_FOUND
