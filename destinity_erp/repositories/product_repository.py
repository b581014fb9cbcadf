# ==============================================================================
# REPOSITORIO DE PRODUCTOS
# ==============================================================================
# Encapsula el acceso a la colección inventory. El nombre del producto
# tiene índice único.
# ==============================================================================

from typing import List, Optional

from destinity_erp.models import Product
from destinity_erp.repositories.base import DocumentStore
from destinity_erp.repositories.document_repository import (
    DocumentRepository,
    contains,
    equals_ignore_case,
)

COLLECTION = 'inventory'
UNIQUE_FIELDS = ('name',)
REQUIRED_FIELDS = ('name', 'price', 'stock', 'category')


class ProductRepository(DocumentRepository):
    """Repositorio del inventario."""

    entity_label = 'producto'
    duplicate_message = 'Ya existe un producto con ese nombre.'

    def __init__(self, store: DocumentStore):
        super().__init__(store.collection(COLLECTION, UNIQUE_FIELDS, REQUIRED_FIELDS))

    def insert(self, product: Product) -> Optional[str]:
        return self._insert_document(product.to_document())

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return Product.from_document(self._find_document(product_id))

    def find_all(self, page: int, page_size: int) -> List[Product]:
        return [Product.from_document(d) for d in self._find_documents(None, page, page_size)]

    def find_by_category(self, category: str) -> List[Product]:
        """Productos de una categoría (sin distinguir mayúsculas)."""
        query = equals_ignore_case('category', category)
        return [Product.from_document(d) for d in self._find_documents(query)]

    def search(self, text: str) -> List[Product]:
        """Busca por nombre, categoría, descripción o proveedor."""
        query = {
            '$or': [
                contains('name', text),
                contains('category', text),
                contains('description', text),
                contains('provider', text),
            ]
        }
        return [Product.from_document(d) for d in self._find_documents(query)]

    def update(self, product: Product) -> Optional[str]:
        return self._update_document(product.to_document())
