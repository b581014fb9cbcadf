# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Único punto de contacto con el almacén de documentos. Convierte entidades
# a documentos y traduce las fallas del almacén a ServiceError.
# ==============================================================================

from .base import (
    DocumentCollection,
    DocumentStore,
    DuplicateKeyError,
    SchemaValidationError,
    StoreError,
    is_valid_id,
    new_object_id,
)
from .document_repository import DocumentRepository
from .interfaces import IProductRepository, ISaleRepository, IUserRepository
from .product_repository import ProductRepository
from .sale_repository import SaleRepository
from .user_repository import UserRepository

__all__ = [
    # Almacén
    'DocumentStore',
    'DocumentCollection',
    'StoreError',
    'DuplicateKeyError',
    'SchemaValidationError',
    'new_object_id',
    'is_valid_id',

    # Repositorios
    'DocumentRepository',
    'UserRepository',
    'ProductRepository',
    'SaleRepository',

    # Interfaces
    'IUserRepository',
    'IProductRepository',
    'ISaleRepository',
]
