# ==============================================================================
# SERVICIO DE VENTAS
# ==============================================================================
# Registro y consulta de ventas. De una venta ya registrada solo se puede
# cambiar el estatus (p. ej. "Completada" → "Cancelada").
# ==============================================================================

import logging
from datetime import datetime
from typing import Callable, List, Optional

from destinity_erp.errors import ServiceError
from destinity_erp.models import Sale, SaleDTO
from destinity_erp.repositories.base import is_valid_id, new_object_id
from destinity_erp.repositories.interfaces import ISaleRepository
from destinity_erp.services.changes import apply_sale_changes, is_same_sale
from destinity_erp.services.common import normalize_pagination, require_param
from destinity_erp.services.validation import validate_sale, validate_sale_status

logger = logging.getLogger(__name__)


class SaleService:
    """Servicio para gestión de ventas."""

    DEFAULT_STATUS = 'Completada'
    ENTITY = 'venta'

    def __init__(self, sale_repo: ISaleRepository, clock: Callable[[], datetime] = datetime.now):
        self.sale_repo = sale_repo
        self._clock = clock

    def create_sale(self, sale: Optional[Sale]) -> Optional[SaleDTO]:
        """
        Registra una venta.

        Completa los valores por defecto: estatus, fechas y subtotal
        (precio * cantidad) si no vienen en el payload.

        Returns:
            SaleDTO de la venta guardada, o None si no se pudo guardar
        """
        if sale is not None:
            now = self._clock()
            if not is_valid_id(sale.id):
                sale.id = new_object_id()
            if not isinstance(sale.status, str) or not sale.status.strip():
                sale.status = self.DEFAULT_STATUS
            if sale.created_at is None:
                sale.created_at = now
            if sale.sale_date is None:
                sale.sale_date = now

        validate_sale(sale)

        item = sale.product_sold
        if item.sub_total is None and isinstance(item.price, (int, float)):
            item.sub_total = item.price * item.quantity

        sale_id = self.sale_repo.insert(sale)
        if sale_id is None:
            logger.warning("No se pudo guardar la venta: %s", sale.id)
            return None

        created = self.sale_repo.find_by_id(sale_id)
        if created is None:
            return None
        logger.info("Venta creada: %s", created.id)
        return SaleDTO.from_sale(created)

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_all_sales(self, page: Optional[int] = None, page_size: Optional[int] = None) -> List[SaleDTO]:
        page, page_size = normalize_pagination(page, page_size)
        sales = self.sale_repo.find_all(page, page_size)
        if not sales:
            logger.warning("No hay ventas registradas")
            raise ServiceError.not_found("No hay ventas registradas")
        logger.info("Ventas obtenidas: %d", len(sales))
        return [SaleDTO.from_sale(s) for s in sales]

    def get_sale_by_id(self, sale_id: str) -> SaleDTO:
        require_param(sale_id, 'ID', self.ENTITY)
        sale = self.sale_repo.find_by_id(sale_id)
        if sale is None:
            logger.warning("No se encontró la venta con ID: %s", sale_id)
            raise ServiceError.not_found("No existe la venta con el identificador proporcionado")
        return SaleDTO.from_sale(sale)

    def get_sales_by_status(self, status: str) -> List[SaleDTO]:
        require_param(status, 'Estatus', self.ENTITY)
        sales = self.sale_repo.find_by_status(status)
        if not sales:
            logger.warning("No hay ventas con el estatus: %s", status)
            raise ServiceError.not_found(f"No hay ventas con el estatus {status}")
        return [SaleDTO.from_sale(s) for s in sales]

    def search_sales(self, text: str) -> List[SaleDTO]:
        """Búsqueda parcial por método de pago, cliente o estatus."""
        require_param(text, 'Texto de búsqueda', self.ENTITY)
        sales = self.sale_repo.search(text)
        if not sales:
            logger.warning("No se encontraron ventas con el texto: %s", text)
            raise ServiceError.not_found("No se encontraron ventas con el texto proporcionado")
        return [SaleDTO.from_sale(s) for s in sales]

    def get_total_sale_count(self) -> int:
        count = self.sale_repo.count()
        logger.info("Total de ventas registradas: %d", count)
        return count

    # =========================================================================
    # ACTUALIZACIÓN Y BAJA
    # =========================================================================

    def update_sale(self, sale_id: str, sale: Optional[Sale]) -> Optional[SaleDTO]:
        """
        Cambia el estatus de una venta.

        Raises:
            ServiceError: NOT_FOUND si no existe; BUSINESS_RULE si el
                estatus es el mismo o está vacío
        """
        require_param(sale_id, 'ID', self.ENTITY)
        existing = self.sale_repo.find_by_id(sale_id)
        if existing is None:
            logger.warning("No se encontró la venta para actualizar con ID: %s", sale_id)
            raise ServiceError.not_found("No existe la venta con el identificador proporcionado")

        if sale is None:
            raise ServiceError.business("La venta no puede estar vacia")
        if is_same_sale(sale, existing):
            logger.warning("No se detectaron cambios al actualizar la venta con ID: %s", sale_id)
            raise ServiceError.business("No se detectaron cambios. La venta no fue modificada")

        validate_sale_status(sale.status)
        apply_sale_changes(existing, sale)
        existing.updated_at = self._clock()

        updated_id = self.sale_repo.update(existing)
        if updated_id is None:
            logger.warning("No se pudo actualizar la venta con ID: %s", sale_id)
            return None

        updated = self.sale_repo.find_by_id(updated_id)
        if updated is None:
            return None
        logger.info("Venta actualizada: %s", updated.id)
        return SaleDTO.from_sale(updated)

    def delete_sale(self, sale_id: str) -> bool:
        require_param(sale_id, 'ID', self.ENTITY)
        if self.sale_repo.find_by_id(sale_id) is None:
            logger.warning("No se encontró la venta para eliminar con ID: %s", sale_id)
            raise ServiceError.not_found("No existe la venta con el identificador proporcionado")

        deleted = self.sale_repo.delete(sale_id)
        if deleted:
            logger.info("Venta eliminada con ID: %s", sale_id)
        else:
            logger.warning("Error al intentar eliminar la venta con ID: %s", sale_id)
        return deleted
