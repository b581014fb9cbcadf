# ==============================================================================
# SERVICIO DE USUARIOS
# ==============================================================================
# Centraliza la lógica de negocio de empleados y proveedores.
#
# - Este servicio NO depende del tipo de almacenamiento
# - Solo interactúa con el repositorio a través de IUserRepository
# - Validaciones, detección de cambios y merge se hacen AQUÍ, no en rutas
#
# Flujo de actualización:
#   buscar (NOT_FOUND) → ¿sin cambios? (BUSINESS_RULE) → validar →
#   aplicar cambios → updated_at → guardar → releer
# ==============================================================================

import logging
from datetime import datetime
from typing import Callable, List, Optional

from destinity_erp.errors import ServiceError
from destinity_erp.models import (
    USER_TYPE_EMPLOYEE,
    EmployeeData,
    ProviderData,
    User,
    UserDTO,
)
from destinity_erp.repositories.base import is_valid_id, new_object_id
from destinity_erp.repositories.interfaces import IUserRepository
from destinity_erp.security import hash_password
from destinity_erp.services.changes import apply_user_changes, is_same_user
from destinity_erp.services.common import normalize_pagination, require_param
from destinity_erp.services.validation import validate_user

logger = logging.getLogger(__name__)


class UserService:
    """
    Servicio para gestión de usuarios.

    Responsabilidades:
    - Alta de empleados y proveedores (con hash de contraseña)
    - Consultas paginadas y filtradas
    - Actualización con detección de cambios
    - Eliminación
    """

    DEFAULT_STATUS = 'Activo'
    DEFAULT_USER_TYPE = USER_TYPE_EMPLOYEE
    ENTITY = 'usuario'

    def __init__(self, user_repo: IUserRepository, clock: Callable[[], datetime] = datetime.now):
        """
        Args:
            user_repo: Repositorio de usuarios
            clock: Fuente de la hora actual
        """
        self.user_repo = user_repo
        self._clock = clock

    # =========================================================================
    # ALTA
    # =========================================================================

    def create_user(self, user: Optional[User]) -> Optional[UserDTO]:
        """
        Registra un usuario (empleado o proveedor).

        Args:
            user: Usuario con contraseña en texto plano

        Returns:
            UserDTO del usuario guardado, o None si no se pudo guardar

        Raises:
            ServiceError: BUSINESS_RULE si no pasa la validación
        """
        if user is not None:
            if not is_valid_id(user.id):
                user.id = new_object_id()
            if not isinstance(user.status, str) or not user.status.strip():
                user.status = self.DEFAULT_STATUS
            if user.created_at is None:
                user.created_at = self._clock()

        validate_user(user)
        user.password = hash_password(user.password)

        user_id = self.user_repo.insert(user)
        if user_id is None:
            logger.warning("No se pudo guardar el usuario: %s", user.id)
            return None

        created = self.user_repo.find_by_id(user_id)
        if created is None:
            return None
        logger.info("Usuario creado: %s (%s)", created.id, created.user_type)
        return UserDTO.from_user(created)

    def create_employee(self, user: Optional[User]) -> Optional[UserDTO]:
        """Alta restringida a empleados."""
        if user is not None and user.profile is not None and not isinstance(user.profile, EmployeeData):
            raise ServiceError.business("El usuario debe ser un empleado.")
        return self.create_user(user)

    def create_provider(self, user: Optional[User]) -> Optional[UserDTO]:
        """Alta restringida a proveedores."""
        if user is not None and user.profile is not None and not isinstance(user.profile, ProviderData):
            raise ServiceError.business("El usuario debe ser un proveedor.")
        return self.create_user(user)

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_all_users(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        user_type: Optional[str] = None
    ) -> List[UserDTO]:
        """
        Lista usuarios de un tipo con paginación.

        Raises:
            ServiceError: NOT_FOUND si la página está vacía
        """
        page, page_size = normalize_pagination(page, page_size)
        if user_type is None:
            user_type = self.DEFAULT_USER_TYPE

        users = self.user_repo.find_all(page, page_size, user_type)
        if not users:
            logger.warning("No hay usuarios registrados")
            raise ServiceError.not_found("No hay usuarios registrados")
        logger.info("Usuarios obtenidos: %d", len(users))
        return [UserDTO.from_user(u) for u in users]

    def get_user_by_id(self, user_id: str) -> UserDTO:
        require_param(user_id, 'ID', self.ENTITY)
        user = self.user_repo.find_by_id(user_id)
        if user is None:
            logger.warning("No se encontró el usuario con ID: %s", user_id)
            raise ServiceError.not_found("No existe el usuario con el identificador proporcionado")
        return UserDTO.from_user(user)

    def get_user_by_email(self, email: str) -> UserDTO:
        require_param(email, 'Correo', self.ENTITY)
        user = self.user_repo.find_by_email(email)
        if user is None:
            logger.warning("No se encontró el usuario con correo: %s", email)
            raise ServiceError.not_found("No existe el usuario con el correo proporcionado")
        return UserDTO.from_user(user)

    def get_users_by_status(self, status: str, user_type: Optional[str] = None) -> List[UserDTO]:
        require_param(status, 'Estatus', self.ENTITY)
        if user_type is None:
            user_type = self.DEFAULT_USER_TYPE

        users = self.user_repo.find_by_status(status, user_type)
        if not users:
            logger.warning("No hay usuarios con el estatus: %s", status)
            raise ServiceError.not_found(f"No hay usuarios con el estatus {status}")
        return [UserDTO.from_user(u) for u in users]

    def get_employees_by_department(self, department: str) -> List[UserDTO]:
        require_param(department, 'Departamento', self.ENTITY)
        users = self.user_repo.find_employees_by_department(department)
        if not users:
            logger.warning("No hay empleados en el departamento: %s", department)
            raise ServiceError.not_found(f"No hay empleados en el departamento {department}")
        return [UserDTO.from_user(u) for u in users]

    def get_providers_by_service(self, service: str) -> List[UserDTO]:
        require_param(service, 'Servicio', self.ENTITY)
        users = self.user_repo.find_providers_by_service(service)
        if not users:
            logger.warning("No hay proveedores del servicio: %s", service)
            raise ServiceError.not_found(f"No hay proveedores del servicio {service}")
        return [UserDTO.from_user(u) for u in users]

    def search_employees(self, text: str) -> List[UserDTO]:
        """Búsqueda parcial por nombre, apellidos o correo (solo empleados)."""
        require_param(text, 'Texto de búsqueda', self.ENTITY)
        users = self.user_repo.search(text, USER_TYPE_EMPLOYEE)
        if not users:
            logger.warning("No se encontraron empleados: %s", text)
            raise ServiceError.not_found("No se encontraron empleados con el texto proporcionado")
        logger.info("Empleados encontrados con el texto '%s': %d", text, len(users))
        return [UserDTO.from_user(u) for u in users]

    def get_total_user_count(self) -> int:
        count = self.user_repo.count()
        logger.info("Total de usuarios registrados: %d", count)
        return count

    def count_users_by_type(self, user_type: Optional[str] = None) -> int:
        return self.user_repo.count_by_type(user_type or self.DEFAULT_USER_TYPE)

    # =========================================================================
    # ACTUALIZACIÓN Y BAJA
    # =========================================================================

    def update_user(self, user_id: str, user: Optional[User]) -> Optional[UserDTO]:
        """
        Actualiza un usuario existente.

        La contraseña guardada nunca se modifica por esta vía.

        Returns:
            UserDTO actualizado, o None si el almacén no modificó nada

        Raises:
            ServiceError: NOT_FOUND si no existe; BUSINESS_RULE si no hay
                cambios, no pasa la validación o cambia el tipo de usuario
        """
        require_param(user_id, 'ID', self.ENTITY)
        existing = self.user_repo.find_by_id(user_id)
        if existing is None:
            logger.warning("No se encontró el usuario para actualizar con ID: %s", user_id)
            raise ServiceError.not_found("No existe el usuario con el identificador proporcionado")

        if user is not None and is_same_user(user, existing):
            logger.warning("No se detectaron cambios al actualizar el usuario con ID: %s", user_id)
            raise ServiceError.business("No se detectaron cambios. El usuario no fue modificado")

        validate_user(user)
        apply_user_changes(existing, user)
        existing.updated_at = self._clock()

        updated_id = self.user_repo.update(existing)
        if updated_id is None:
            logger.warning("No se pudo actualizar el usuario con ID: %s", user_id)
            return None

        updated = self.user_repo.find_by_id(updated_id)
        if updated is None:
            return None
        logger.info("Usuario actualizado: %s", updated.id)
        return UserDTO.from_user(updated)

    def delete_user(self, user_id: str) -> bool:
        """
        Elimina un usuario.

        Returns:
            True si se eliminó

        Raises:
            ServiceError: NOT_FOUND si no existe
        """
        require_param(user_id, 'ID', self.ENTITY)
        if self.user_repo.find_by_id(user_id) is None:
            logger.warning("No se encontró el usuario para eliminar con ID: %s", user_id)
            raise ServiceError.not_found("No existe el usuario con el identificador proporcionado")

        deleted = self.user_repo.delete(user_id)
        if deleted:
            logger.info("Usuario eliminado con ID: %s", user_id)
        else:
            logger.warning("Error al intentar eliminar el usuario con ID: %s", user_id)
        return deleted
