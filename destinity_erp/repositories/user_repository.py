# ==============================================================================
# REPOSITORIO DE USUARIOS
# ==============================================================================
# Encapsula el acceso a la colección hr.
# Los usuarios se almacenan como documentos:
#   {_id, firstName, lastName, middleName, email, password, userType, status,
#    employeeData | providerData, createdAt, updatedAt}
# ==============================================================================

from typing import List, Optional

from destinity_erp.models import USER_TYPE_EMPLOYEE, User
from destinity_erp.repositories.base import DocumentStore
from destinity_erp.repositories.document_repository import DocumentRepository, contains

COLLECTION = 'hr'
UNIQUE_FIELDS = ('email',)
REQUIRED_FIELDS = ('firstName', 'lastName', 'email', 'password', 'userType')


class UserRepository(DocumentRepository):
    """Repositorio para gestión de usuarios (empleados y proveedores)."""

    entity_label = 'usuario'
    duplicate_message = 'Ya existe un usuario con ese correo.'

    def __init__(self, store: DocumentStore):
        """
        Args:
            store: Almacén de documentos abierto
        """
        super().__init__(store.collection(COLLECTION, UNIQUE_FIELDS, REQUIRED_FIELDS))

    def insert(self, user: User) -> Optional[str]:
        """
        Inserta un usuario.

        Returns:
            ID del usuario insertado
        """
        return self._insert_document(user.to_document())

    def find_by_id(self, user_id: str) -> Optional[User]:
        return User.from_document(self._find_document(user_id))

    def find_by_email(self, email: str) -> Optional[User]:
        found = self._find_documents({'email': email}, page_size=1)
        return User.from_document(found[0]) if found else None

    def find_all(self, page: int, page_size: int, user_type: Optional[str] = None) -> List[User]:
        """
        Lista usuarios con paginación.

        Args:
            page: Número de página (desde 0)
            page_size: Tamaño de página
            user_type: 'employee' / 'provider' (vacío = todos)
        """
        query = {'userType': user_type} if user_type else None
        return [User.from_document(d) for d in self._find_documents(query, page, page_size)]

    def find_by_status(self, status: str, user_type: str) -> List[User]:
        query = {'$and': [{'status': status}, {'userType': user_type}]}
        return [User.from_document(d) for d in self._find_documents(query)]

    def find_employees_by_department(self, department: str) -> List[User]:
        query = {'employeeData.department': department}
        return [User.from_document(d) for d in self._find_documents(query)]

    def find_providers_by_service(self, service_type: str) -> List[User]:
        query = {'providerData.serviceType': service_type}
        return [User.from_document(d) for d in self._find_documents(query)]

    def search(self, text: str, user_type: str = USER_TYPE_EMPLOYEE) -> List[User]:
        """Busca por nombre, apellidos o correo dentro de un tipo de usuario."""
        query = {
            '$and': [
                {'userType': user_type},
                {'$or': [
                    contains('firstName', text),
                    contains('lastName', text),
                    contains('middleName', text),
                    contains('email', text),
                ]},
            ]
        }
        return [User.from_document(d) for d in self._find_documents(query)]

    def update(self, user: User) -> Optional[str]:
        """
        Guarda los campos del usuario.

        Returns:
            ID del usuario si el documento cambió, None en otro caso
        """
        return self._update_document(user.to_document())

    def count_by_type(self, user_type: str) -> int:
        return len(self._find_documents({'userType': user_type}))
