# ==============================================================================
# VALIDACIÓN DE ENTIDADES
# ==============================================================================
# Funciones puras: revisan una entidad y lanzan ServiceError(BUSINESS_RULE)
# en la PRIMERA regla violada. No acumulan errores.
#
# El error lleva el nombre del campo en `error.field`.
# ==============================================================================

import re
from typing import Any, Optional

from destinity_erp.errors import ServiceError
from destinity_erp.models import EmployeeData, Product, ProviderData, Sale, User

# Se aplican con fullmatch: la cadena completa debe coincidir.
# Letras, dígitos, espacios y puntuación común
SAFE_TEXT_PATTERN = re.compile(r"[\w\s.,;:!¡¿?()\-'@+%#=/]*")
EMAIL_PATTERN = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')
PHONE_PATTERN = re.compile(r'[0-9]{10}')

MIN_PASSWORD_LENGTH = 8
MIN_STOCK = 10
VALID_CATEGORIES = ('BLANCOS', 'ALIMENTOS', 'ELECTRÓNICOS')


def _number(value: Any) -> Optional[float]:
    """Valor numérico o None (bool y textos cuentan como ausentes)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def require_text(value: Any, field_name: str) -> None:
    """
    Campo de texto obligatorio y con carácteres seguros.

    Args:
        value: Valor recibido
        field_name: Nombre legible del campo (se usa en el mensaje)

    Raises:
        ServiceError: BUSINESS_RULE si está vacío, no es texto o trae
            carácteres no válidos
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ServiceError.business(f"El campo {field_name} no puede estar vacio", field_name)
    if not isinstance(value, str) or not SAFE_TEXT_PATTERN.fullmatch(value):
        raise ServiceError.business(
            f"El campo {field_name} contiene carácteres no válidos", field_name
        )


# ==============================================================================
# USUARIOS
# ==============================================================================

def validate_user(user: Optional[User]) -> None:
    """
    Valida un usuario completo (datos base + subdocumento).

    El caso "empleado y proveedor" se rechaza al leer el payload
    (ver models.entities._profile_from); aquí solo puede faltar el perfil.
    """
    if user is None:
        raise ServiceError.business("El usuario no puede estar vacio")

    require_text(user.first_name, "Nombre")
    require_text(user.last_name, "Apellido paterno")
    if user.middle_name is not None and not isinstance(user.middle_name, str):
        raise ServiceError.business(
            "El campo Apellido materno contiene carácteres no válidos", "Apellido materno"
        )
    require_text(user.email, "Correo")
    require_text(user.password, "Contraseña")

    if len(user.password) < MIN_PASSWORD_LENGTH:
        raise ServiceError.business(
            "La contraseña debe contener mínimo 8 carácteres.", "Contraseña"
        )
    if not EMAIL_PATTERN.fullmatch(user.email):
        raise ServiceError.business(
            "El correo electrónico no tiene un formato válido.", "Correo"
        )

    profile = user.profile
    if isinstance(profile, EmployeeData):
        _validate_employee(profile)
    elif isinstance(profile, ProviderData):
        _validate_provider(profile)
    else:
        raise ServiceError.business("El usuario debe ser un empleado o un proveedor.")


def _validate_employee(data: EmployeeData) -> None:
    require_text(data.role, "Rol")
    require_text(data.department, "Departamento")
    salary = _number(data.salary)
    if salary is None or salary <= 0:
        raise ServiceError.business("El salario del empleado debe ser mayor a 0.", "Salario")


def _validate_provider(data: ProviderData) -> None:
    require_text(data.company, "Empresa")
    require_text(data.service_type, "Tipo de Servicio")
    require_text(data.phone, "Teléfono de Contacto")
    if not PHONE_PATTERN.fullmatch(data.phone):
        raise ServiceError.business(
            "El teléfono debe contener 10 digitos", "Teléfono de Contacto"
        )


# ==============================================================================
# PRODUCTOS
# ==============================================================================

def validate_product(product: Optional[Product]) -> None:
    """Valida textos, precio, stock y categoría de un producto."""
    if product is None:
        raise ServiceError.business("El producto no puede estar vacio")

    require_text(product.name, "Nombre")
    require_text(product.category, "Categoria")
    require_text(product.description, "Descripción")
    require_text(product.provider, "Proveedor")
    require_text(product.image, "Imagen")

    price = _number(product.price)
    if price is None or price <= 0:
        raise ServiceError.business("El precio debe ser mayor a 0", "Precio")

    stock = _number(product.stock)
    if stock is None or stock <= MIN_STOCK:
        raise ServiceError.business("El stock debe ser mayor a 10", "Stock")
    if stock % 1 != 0:
        raise ServiceError.business("El stock debe contener un número entero", "Stock")

    if product.category.upper() not in VALID_CATEGORIES:
        raise ServiceError.business(
            "La categoría no es valida. Usa: " + ", ".join(VALID_CATEGORIES), "Categoria"
        )


# ==============================================================================
# VENTAS
# ==============================================================================

def validate_sale(sale: Optional[Sale]) -> None:
    """Valida una venta nueva (cliente, producto, método de pago y total)."""
    if sale is None:
        raise ServiceError.business("La venta no puede estar vacia")

    require_text(sale.customer_info.name if sale.customer_info else None, "Nombre del cliente")
    require_text(sale.payment_method, "Método de pago")

    quantity = _number(sale.product_sold.quantity) if sale.product_sold else None
    if quantity is None or quantity <= 0 or quantity % 1 != 0:
        raise ServiceError.business(
            "La cantidad debe ser un número entero mayor a 0", "Cantidad"
        )

    total = _number(sale.total_amount)
    if total is None or total <= 0:
        raise ServiceError.business("El total debe ser mayor a 0", "Total")


def validate_sale_status(status: Any) -> None:
    """Única regla al actualizar una venta: el estatus."""
    require_text(status, "Estatus")
