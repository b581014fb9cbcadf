# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Entidades del dominio (dataclasses) y DTOs expuestos por la API.
# Independientes del mecanismo de persistencia.
# ==============================================================================

from .entities import (
    # Usuarios
    User,
    EmployeeData,
    ProviderData,
    UserProfile,
    USER_TYPE_EMPLOYEE,
    USER_TYPE_PROVIDER,

    # Inventario
    Product,

    # Ventas
    Sale,
    CustomerInfo,
    ProductSold,
)
from .dtos import UserDTO, ProductDTO, SaleDTO

__all__ = [
    # Usuarios
    'User',
    'EmployeeData',
    'ProviderData',
    'UserProfile',
    'USER_TYPE_EMPLOYEE',
    'USER_TYPE_PROVIDER',

    # Inventario
    'Product',

    # Ventas
    'Sale',
    'CustomerInfo',
    'ProductSold',

    # DTOs
    'UserDTO',
    'ProductDTO',
    'SaleDTO',
]
