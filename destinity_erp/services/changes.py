# ==============================================================================
# DETECCIÓN Y APLICACIÓN DE CAMBIOS
# ==============================================================================
# is_same_*:       ¿el payload entrante es idéntico a lo guardado?
# apply_*_changes: copia los campos editables del payload sobre la entidad
#                  guardada. Nunca toca id, created_at ni la contraseña.
# ==============================================================================

from destinity_erp.errors import ServiceError
from destinity_erp.models import EmployeeData, Product, ProviderData, Sale, User

USER_FIELDS = ('first_name', 'last_name', 'middle_name', 'email', 'status')
PRODUCT_FIELDS = (
    'name', 'category', 'description', 'image', 'provider', 'status', 'price', 'stock'
)


def _same_fields(a, b, fields) -> bool:
    return all(getattr(a, f) == getattr(b, f) for f in fields)


def _copy_fields(target, source, fields) -> None:
    for f in fields:
        setattr(target, f, getattr(source, f))


# ==============================================================================
# USUARIOS
# ==============================================================================

def is_same_user(incoming: User, stored: User) -> bool:
    """
    Compara datos base y subdocumento.

    Un cambio de tipo (empleado ↔ proveedor) cuenta como cambio.
    """
    if not _same_fields(incoming, stored, USER_FIELDS):
        return False
    if type(incoming.profile) is not type(stored.profile):
        return False
    return incoming.profile == stored.profile


def apply_user_changes(target: User, source: User) -> None:
    """
    Aplica los cambios de `source` sobre `target`.

    Raises:
        ServiceError: BUSINESS_RULE si los tipos de usuario difieren. Se
            verifica antes de modificar cualquier campo de `target`.
    """
    both_employees = isinstance(target.profile, EmployeeData) and isinstance(source.profile, EmployeeData)
    both_providers = isinstance(target.profile, ProviderData) and isinstance(source.profile, ProviderData)
    if not (both_employees or both_providers):
        raise ServiceError.business(
            "No se puede aplicar cambios entre tipos de usuario diferentes."
        )

    _copy_fields(target, source, USER_FIELDS)
    if both_employees:
        _copy_fields(target.profile, source.profile, ('role', 'department', 'salary'))
    else:
        _copy_fields(target.profile, source.profile, ('company', 'service_type', 'phone'))


# ==============================================================================
# PRODUCTOS
# ==============================================================================

def is_same_product(incoming: Product, stored: Product) -> bool:
    return _same_fields(incoming, stored, PRODUCT_FIELDS)


def apply_product_changes(target: Product, source: Product) -> None:
    _copy_fields(target, source, PRODUCT_FIELDS)


# ==============================================================================
# VENTAS
# ==============================================================================
# Solo el estatus de una venta es editable.

def is_same_sale(incoming: Sale, stored: Sale) -> bool:
    return incoming.status == stored.status


def apply_sale_changes(target: Sale, source: Sale) -> None:
    target.status = source.status
