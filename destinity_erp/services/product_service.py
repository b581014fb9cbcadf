# ==============================================================================
# SERVICIO DE INVENTARIO
# ==============================================================================
# Alta, consulta, actualización y baja de productos. El nombre del producto
# es único: el repositorio lo reporta como DUPLICATED_KEY.
# ==============================================================================

import logging
from datetime import datetime
from typing import Callable, List, Optional

from destinity_erp.errors import ServiceError
from destinity_erp.models import Product, ProductDTO
from destinity_erp.repositories.base import is_valid_id, new_object_id
from destinity_erp.repositories.interfaces import IProductRepository
from destinity_erp.services.changes import apply_product_changes, is_same_product
from destinity_erp.services.common import normalize_pagination, require_param
from destinity_erp.services.validation import validate_product

logger = logging.getLogger(__name__)


class ProductService:
    """Servicio para gestión del inventario."""

    DEFAULT_STATUS = 'Disponible'
    ENTITY = 'producto'

    def __init__(self, product_repo: IProductRepository, clock: Callable[[], datetime] = datetime.now):
        self.product_repo = product_repo
        self._clock = clock

    def create_product(self, product: Optional[Product]) -> Optional[ProductDTO]:
        """
        Registra un producto.

        Returns:
            ProductDTO del producto guardado, o None si no se pudo guardar

        Raises:
            ServiceError: BUSINESS_RULE si no pasa la validación,
                DUPLICATED_KEY si el nombre ya existe
        """
        if product is not None:
            if not is_valid_id(product.id):
                product.id = new_object_id()
            if not isinstance(product.status, str) or not product.status.strip():
                product.status = self.DEFAULT_STATUS
            if product.created_at is None:
                product.created_at = self._clock()

        validate_product(product)

        product_id = self.product_repo.insert(product)
        if product_id is None:
            logger.warning("No se pudo guardar el producto: %s", product.id)
            return None

        created = self.product_repo.find_by_id(product_id)
        if created is None:
            return None
        logger.info("Producto creado: %s", created.name)
        return ProductDTO.from_product(created)

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_all_products(self, page: Optional[int] = None, page_size: Optional[int] = None) -> List[ProductDTO]:
        page, page_size = normalize_pagination(page, page_size)
        products = self.product_repo.find_all(page, page_size)
        if not products:
            logger.warning("No hay productos en el inventario")
            raise ServiceError.not_found("No hay productos en el inventario")
        logger.info("Productos obtenidos: %d", len(products))
        return [ProductDTO.from_product(p) for p in products]

    def get_product_by_id(self, product_id: str) -> ProductDTO:
        require_param(product_id, 'ID', self.ENTITY)
        product = self.product_repo.find_by_id(product_id)
        if product is None:
            logger.warning("No se encontró el producto con ID: %s", product_id)
            raise ServiceError.not_found("No existe el producto con el identificador proporcionado")
        return ProductDTO.from_product(product)

    def get_products_by_category(self, category: str) -> List[ProductDTO]:
        require_param(category, 'Categoría', self.ENTITY)
        products = self.product_repo.find_by_category(category)
        if not products:
            logger.warning("No hay productos en la categoría: %s", category)
            raise ServiceError.not_found("No hay productos en la categoría proporcionada")
        return [ProductDTO.from_product(p) for p in products]

    def search_products(self, text: str) -> List[ProductDTO]:
        """Búsqueda parcial por nombre, categoría, descripción o proveedor."""
        require_param(text, 'Texto de búsqueda', self.ENTITY)
        products = self.product_repo.search(text)
        if not products:
            logger.warning("No se encontraron productos con el texto: %s", text)
            raise ServiceError.not_found("No se encontraron productos con el texto proporcionado")
        logger.info("Productos encontrados con el texto '%s': %d", text, len(products))
        return [ProductDTO.from_product(p) for p in products]

    def get_total_product_count(self) -> int:
        count = self.product_repo.count()
        logger.info("Total de productos en inventario: %d", count)
        return count

    # =========================================================================
    # ACTUALIZACIÓN Y BAJA
    # =========================================================================

    def update_product(self, product_id: str, product: Optional[Product]) -> Optional[ProductDTO]:
        """
        Actualiza un producto existente.

        Raises:
            ServiceError: NOT_FOUND si no existe; BUSINESS_RULE si no hay
                cambios o no pasa la validación
        """
        require_param(product_id, 'ID', self.ENTITY)
        existing = self.product_repo.find_by_id(product_id)
        if existing is None:
            logger.warning("No se encontró el producto para actualizar con ID: %s", product_id)
            raise ServiceError.not_found("No existe el producto con el identificador proporcionado")

        if product is not None and is_same_product(product, existing):
            logger.warning("No se detectaron cambios al actualizar el producto con ID: %s", product_id)
            raise ServiceError.business("No se detectaron cambios. El producto no fue modificado")

        validate_product(product)
        apply_product_changes(existing, product)
        existing.updated_at = self._clock()

        updated_id = self.product_repo.update(existing)
        if updated_id is None:
            logger.warning("No se pudo actualizar el producto con ID: %s", product_id)
            return None

        updated = self.product_repo.find_by_id(updated_id)
        if updated is None:
            return None
        logger.info("Producto actualizado: %s", updated.name)
        return ProductDTO.from_product(updated)

    def delete_product(self, product_id: str) -> bool:
        require_param(product_id, 'ID', self.ENTITY)
        if self.product_repo.find_by_id(product_id) is None:
            logger.warning("No se encontró el producto para eliminar con ID: %s", product_id)
            raise ServiceError.not_found("No existe el producto con el identificador proporcionado")

        deleted = self.product_repo.delete(product_id)
        if deleted:
            logger.info("Producto eliminado con ID: %s", product_id)
        else:
            logger.warning("Error al intentar eliminar el producto con ID: %s", product_id)
        return deleted
