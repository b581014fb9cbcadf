# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Los servicios reciben repositorios por constructor y no conocen el
# almacén concreto. Validación, detección de cambios y merge viven aquí.
# ==============================================================================

from .auth_service import AuthService
from .common import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, normalize_pagination
from .product_service import ProductService
from .sale_service import SaleService
from .user_service import UserService

__all__ = [
    'AuthService',
    'UserService',
    'ProductService',
    'SaleService',
    'normalize_pagination',
    'DEFAULT_PAGE',
    'DEFAULT_PAGE_SIZE',
]
