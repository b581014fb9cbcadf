# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Punto único donde se construyen repositorios y servicios. Facilita:
#   - Inyección de dependencias (los servicios reciben repositorios)
#   - Testing (un contenedor por test sobre un directorio temporal)
#   - Cambiar de almacén sin tocar servicios
#
# El contenedor es DUEÑO del almacén de documentos: lo abre al construirse
# y lo libera en close() (o al salir del bloque `with`).
# ==============================================================================

import logging
from typing import Optional

from destinity_erp.config import Settings
from destinity_erp.repositories import (
    DocumentStore,
    ProductRepository,
    SaleRepository,
    UserRepository,
)
from destinity_erp.security import TokenSigner
from destinity_erp.services import AuthService, ProductService, SaleService, UserService

logger = logging.getLogger(__name__)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Uso:
        with AppContainer(settings) as container:
            container.user_service.get_total_user_count()
    """

    def __init__(self, settings: Settings):
        """
        Args:
            settings: Configuración ya cargada
        """
        self.settings = settings
        self.store = DocumentStore(settings.data_dir)

        # Inicialización perezosa
        self._user_repo: Optional[UserRepository] = None
        self._product_repo: Optional[ProductRepository] = None
        self._sale_repo: Optional[SaleRepository] = None

        self._user_service: Optional[UserService] = None
        self._product_service: Optional[ProductService] = None
        self._sale_service: Optional[SaleService] = None
        self._auth_service: Optional[AuthService] = None

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def user_repo(self) -> UserRepository:
        if self._user_repo is None:
            self._user_repo = UserRepository(self.store)
        return self._user_repo

    @property
    def product_repo(self) -> ProductRepository:
        if self._product_repo is None:
            self._product_repo = ProductRepository(self.store)
        return self._product_repo

    @property
    def sale_repo(self) -> SaleRepository:
        if self._sale_repo is None:
            self._sale_repo = SaleRepository(self.store)
        return self._sale_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def user_service(self) -> UserService:
        if self._user_service is None:
            self._user_service = UserService(self.user_repo)
        return self._user_service

    @property
    def product_service(self) -> ProductService:
        if self._product_service is None:
            self._product_service = ProductService(self.product_repo)
        return self._product_service

    @property
    def sale_service(self) -> SaleService:
        if self._sale_service is None:
            self._sale_service = SaleService(self.sale_repo)
        return self._sale_service

    @property
    def auth_service(self) -> AuthService:
        if self._auth_service is None:
            signer = TokenSigner(self.settings.secret_key, self.settings.token_ttl_hours)
            self._auth_service = AuthService(self.user_repo, signer)
        return self._auth_service

    # =========================================================================
    # CICLO DE VIDA
    # =========================================================================

    def close(self) -> None:
        """Libera el almacén. Los repositorios y servicios ya entregados fallan
        con DATABASE_ERROR a partir de este punto."""
        self.store.close()

    def __enter__(self) -> 'AppContainer':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
