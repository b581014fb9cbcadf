# ==============================================================================
# REPOSITORIO DE VENTAS
# ==============================================================================
# Encapsula el acceso a la colección sales. Cada venta guarda su propia
# copia del cliente (customerInfo) y del producto (productSold).
# ==============================================================================

from typing import List, Optional

from destinity_erp.models import Sale
from destinity_erp.repositories.base import DocumentStore
from destinity_erp.repositories.document_repository import DocumentRepository, contains

COLLECTION = 'sales'
REQUIRED_FIELDS = ('customerInfo', 'productSold', 'paymentMethod', 'totalAmount')


class SaleRepository(DocumentRepository):
    """Repositorio de ventas."""

    entity_label = 'venta'
    duplicate_message = 'La venta ya existe.'

    def __init__(self, store: DocumentStore):
        super().__init__(store.collection(COLLECTION, required_fields=REQUIRED_FIELDS))

    def insert(self, sale: Sale) -> Optional[str]:
        return self._insert_document(sale.to_document())

    def find_by_id(self, sale_id: str) -> Optional[Sale]:
        return Sale.from_document(self._find_document(sale_id))

    def find_all(self, page: int, page_size: int) -> List[Sale]:
        return [Sale.from_document(d) for d in self._find_documents(None, page, page_size)]

    def find_by_status(self, status: str) -> List[Sale]:
        return [Sale.from_document(d) for d in self._find_documents({'status': status})]

    def search(self, text: str) -> List[Sale]:
        """Busca por método de pago, nombre del cliente o estatus."""
        query = {
            '$or': [
                contains('paymentMethod', text),
                contains('customerInfo.name', text),
                contains('status', text),
            ]
        }
        return [Sale.from_document(d) for d in self._find_documents(query)]

    def update(self, sale: Sale) -> Optional[str]:
        return self._update_document(sale.to_document())
