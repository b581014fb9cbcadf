# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Contratos que los servicios esperan de la capa de persistencia. Los
# servicios dependen de estos protocolos y no de DocumentCollection:
#
#   - Otro almacén (MongoDB, SQL) solo requiere nuevas implementaciones
#   - Los tests pueden inyectar dobles en memoria
#
# Todas las implementaciones lanzan ServiceError; nunca excepciones propias
# del almacén.
# ==============================================================================

from typing import List, Optional, Protocol, runtime_checkable

from destinity_erp.models import Product, Sale, User


@runtime_checkable
class IUserRepository(Protocol):
    """Persistencia de usuarios (colección hr)."""

    def insert(self, user: User) -> Optional[str]:
        ...

    def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def find_all(self, page: int, page_size: int, user_type: Optional[str] = None) -> List[User]:
        ...

    def find_by_status(self, status: str, user_type: str) -> List[User]:
        ...

    def find_employees_by_department(self, department: str) -> List[User]:
        ...

    def find_providers_by_service(self, service_type: str) -> List[User]:
        ...

    def search(self, text: str, user_type: str) -> List[User]:
        ...

    def update(self, user: User) -> Optional[str]:
        ...

    def delete(self, user_id: str) -> bool:
        ...

    def count(self) -> int:
        ...

    def count_by_type(self, user_type: str) -> int:
        ...


@runtime_checkable
class IProductRepository(Protocol):
    """Persistencia de productos (colección inventory)."""

    def insert(self, product: Product) -> Optional[str]:
        ...

    def find_by_id(self, product_id: str) -> Optional[Product]:
        ...

    def find_all(self, page: int, page_size: int) -> List[Product]:
        ...

    def find_by_category(self, category: str) -> List[Product]:
        ...

    def search(self, text: str) -> List[Product]:
        ...

    def update(self, product: Product) -> Optional[str]:
        ...

    def delete(self, product_id: str) -> bool:
        ...

    def count(self) -> int:
        ...


@runtime_checkable
class ISaleRepository(Protocol):
    """Persistencia de ventas (colección sales)."""

    def insert(self, sale: Sale) -> Optional[str]:
        ...

    def find_by_id(self, sale_id: str) -> Optional[Sale]:
        ...

    def find_all(self, page: int, page_size: int) -> List[Sale]:
        ...

    def find_by_status(self, status: str) -> List[Sale]:
        ...

    def search(self, text: str) -> List[Sale]:
        ...

    def update(self, sale: Sale) -> Optional[str]:
        ...

    def delete(self, sale_id: str) -> bool:
        ...

    def count(self) -> int:
        ...
