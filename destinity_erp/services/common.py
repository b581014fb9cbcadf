# ==============================================================================
# UTILIDADES COMPARTIDAS POR LOS SERVICIOS
# ==============================================================================

from typing import Any, Optional, Tuple

from destinity_erp.errors import ServiceError

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 20


def normalize_pagination(page: Optional[int], page_size: Optional[int]) -> Tuple[int, int]:
    """
    Normaliza los parámetros de paginación.

    Args:
        page: Página solicitada (negativa o ausente → 0)
        page_size: Tamaño solicitado (ausente o <= 0 → 20)

    Returns:
        Tupla (page, page_size)
    """
    if page is None or page < 0:
        page = DEFAULT_PAGE
    if page_size is None or page_size <= 0:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size


def require_param(value: Any, prop: str, entity: str) -> None:
    """
    Parámetro obligatorio de una operación.

    Raises:
        ServiceError: INVALID_INPUT ("{prop} del {entity} es requerido")
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ServiceError.invalid_input(prop, entity)
