# ==============================================================================
# REPOSITORIO BASE SOBRE EL ALMACÉN DE DOCUMENTOS
# ==============================================================================
# Traduce las excepciones del almacén a la taxonomía de ServiceError:
#
#   SchemaValidationError → VALIDATION_FAILED
#   DuplicateKeyError     → DUPLICATED_KEY
#   StoreError            → DATABASE_ERROR
# ==============================================================================

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from destinity_erp.errors import ServiceError
from destinity_erp.repositories.base import (
    DocumentCollection,
    DuplicateKeyError,
    SchemaValidationError,
    StoreError,
    is_valid_id,
)

logger = logging.getLogger(__name__)

SCHEMA_ERROR_MESSAGE = "El documento no cumple con el esquema definido."


def contains(field: str, text: str) -> Dict[str, Any]:
    """Filtro de subcadena sin distinguir mayúsculas."""
    return {field: {'$regex': re.escape(text), '$options': 'i'}}


def equals_ignore_case(field: str, text: str) -> Dict[str, Any]:
    """Filtro de igualdad sin distinguir mayúsculas."""
    return {field: {'$regex': f'^{re.escape(text)}$', '$options': 'i'}}


class DocumentRepository:
    """
    Base de los repositorios de entidades.

    Las subclases definen `entity_label` (para los mensajes) y
    `duplicate_message` (violación del índice único).
    """

    entity_label = 'documento'
    duplicate_message = 'Registro duplicado.'

    def __init__(self, collection: DocumentCollection):
        self.collection = collection

    @contextmanager
    def _translate(self, message: str) -> Iterator[None]:
        """
        Reclasifica cualquier falla del almacén como ServiceError.

        Args:
            message: Mensaje para DATABASE_ERROR
        """
        try:
            yield
        except SchemaValidationError as e:
            logger.warning("%s: %s", SCHEMA_ERROR_MESSAGE, e)
            raise ServiceError.db_validation_failed(SCHEMA_ERROR_MESSAGE) from e
        except DuplicateKeyError as e:
            logger.warning("Clave duplicada en %s: %s", self.collection.name, e)
            raise ServiceError.db_duplicated_key(self.duplicate_message) from e
        except StoreError as e:
            logger.error("%s %s", message, e)
            raise ServiceError.db_error(message) from e

    # =========================================================================
    # OPERACIONES SOBRE DOCUMENTOS
    # =========================================================================

    def _insert_document(self, doc: Dict[str, Any]) -> Optional[str]:
        with self._translate(f"Error al insertar {self.entity_label} en la base de datos."):
            return self.collection.insert_one(doc)

    def _find_document(self, doc_id: str) -> Optional[Dict[str, Any]]:
        if not is_valid_id(doc_id):
            logger.warning("ID inválido recibido: %s", doc_id)
            return None
        with self._translate(f"Error al obtener {self.entity_label}."):
            return self.collection.find_by_id(doc_id)

    def _find_documents(
        self,
        query: Optional[Dict[str, Any]] = None,
        page: int = 0,
        page_size: int = 0
    ) -> List[Dict[str, Any]]:
        with self._translate(f"Error al obtener {self.entity_label}."):
            return self.collection.find(query, skip=page * page_size, limit=page_size)

    def _update_document(self, doc: Dict[str, Any]) -> Optional[str]:
        """Aplica $set con el documento completo. Retorna el id si hubo cambios."""
        doc_id = doc.get('_id')
        fields = {k: v for k, v in doc.items() if k != '_id'}
        with self._translate(f"Error al actualizar {self.entity_label}."):
            modified = self.collection.update_one(doc_id, fields)
        return doc_id if modified > 0 else None

    def delete(self, doc_id: str) -> bool:
        if not is_valid_id(doc_id):
            logger.warning("ID inválido al eliminar: %s", doc_id)
            return False
        with self._translate(f"Error al eliminar {self.entity_label}."):
            return self.collection.delete_one(doc_id) > 0

    def count(self) -> int:
        with self._translate(f"Error al contar {self.entity_label}."):
            return self.collection.count()
