# ==============================================================================
# ALMACÉN DE DOCUMENTOS - Colecciones JSON en disco
# ==============================================================================
# Cada colección es un archivo JSON {_id: documento}. Ofrece lo mínimo que
# consumen los repositorios:
#
#   insert_one / find_one / find / count / update_one / delete_one
#
# Filtros soportados:
#   {'campo': valor}                             igualdad (admite 'a.b')
#   {'campo': {'$regex': patron, '$options': 'i'}}
#   {'$and': [filtro, ...]}  /  {'$or': [filtro, ...]}
#
# Restricciones del almacén:
#   - unique_fields:   índice único (DuplicateKeyError)
#   - required_fields: esquema mínimo, campo presente y no nulo
#                      (SchemaValidationError)
#
# Las excepciones de este módulo son propias del almacén; los repositorios
# las traducen a ServiceError. Nunca deben llegar a los servicios.
# ==============================================================================

import copy
import json
import logging
import os
import re
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

OBJECT_ID_PATTERN = re.compile(r'[0-9a-f]{24}')


def new_object_id() -> str:
    """Genera un identificador opaco de 24 caracteres hex."""
    return uuid.uuid4().hex[:24]


def is_valid_id(value: Any) -> bool:
    """Verifica que un texto tenga formato de identificador del almacén."""
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


# ==============================================================================
# EXCEPCIONES DEL ALMACÉN
# ==============================================================================

class StoreError(Exception):
    """Falla genérica del almacén (lectura, escritura, archivo corrupto)."""


class DuplicateKeyError(StoreError):
    """Violación de un índice único."""

    def __init__(self, collection: str, field: str, value: Any):
        super().__init__(f"{collection}: valor duplicado para '{field}': {value!r}")
        self.field = field
        self.value = value


class SchemaValidationError(StoreError):
    """El documento no cumple el esquema de la colección."""

    code = 121

    def __init__(self, collection: str, field: str):
        super().__init__(f"{collection}: el campo '{field}' es obligatorio")
        self.field = field


# ==============================================================================
# ACCESO A ARCHIVOS
# ==============================================================================

class BaseRepository(ABC):
    """
    Clase base para archivos JSON con escritura atómica.

    Proporciona lectura/escritura con un lock global de proceso. Es la
    única garantía de concurrencia: cada operación sobre un documento es
    atómica, no hay control optimista entre peticiones.
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, file_path: str):
        """
        Args:
            file_path: Ruta absoluta al archivo JSON de datos
        """
        self.file_path = file_path
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Crea el archivo con datos vacíos si no existe."""
        with self._file_lock:
            if not os.path.exists(self.file_path):
                self._write_raw(self._empty_data())

    @abstractmethod
    def _empty_data(self) -> Any:
        """Estructura vacía del archivo."""

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Raises:
            StoreError: Si el archivo no se puede leer o no es JSON válido
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except FileNotFoundError:
                return self._empty_data()
            except (OSError, json.JSONDecodeError) as e:
                raise StoreError(f"No se pudo leer {self.file_path}: {e}") from e

    def _write_raw(self, data: Any) -> None:
        """
        Escribe datos al archivo JSON (archivo temporal + os.replace).

        Raises:
            StoreError: Si hay error de escritura
        """
        with self._file_lock:
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except (OSError, TypeError, ValueError) as e:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise StoreError(f"No se pudo escribir {self.file_path}: {e}") from e


# ==============================================================================
# COLECCIÓN DE DOCUMENTOS
# ==============================================================================

def _resolve(doc: Dict[str, Any], path: str) -> Any:
    """Obtiene el valor de un campo con notación de punto ('a.b')."""
    value: Any = doc
    for part in path.split('.'):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def matches(doc: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
    """Evalúa un filtro sobre un documento."""
    if not query:
        return True
    for key, cond in query.items():
        if key == '$and':
            if not all(matches(doc, sub) for sub in cond):
                return False
        elif key == '$or':
            if not any(matches(doc, sub) for sub in cond):
                return False
        else:
            value = _resolve(doc, key)
            if isinstance(cond, dict) and '$regex' in cond:
                flags = re.IGNORECASE if 'i' in cond.get('$options', '') else 0
                if not isinstance(value, str) or re.search(cond['$regex'], value, flags) is None:
                    return False
            elif value != cond:
                return False
    return True


class DocumentCollection(BaseRepository):
    """
    Colección de documentos persistida como {_id: documento}.

    Los documentos devueltos son copias: modificarlos no altera el almacén.
    """

    def __init__(
        self,
        name: str,
        file_path: str,
        unique_fields: Iterable[str] = (),
        required_fields: Iterable[str] = ()
    ):
        self.name = name
        self.unique_fields = tuple(unique_fields)
        self.required_fields = tuple(required_fields)
        self.closed = False
        super().__init__(file_path)

    def _empty_data(self) -> Dict[str, Any]:
        return {}

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if self.closed:
            raise StoreError(f"{self.name}: la colección está cerrada")
        data = self._read_raw()
        if not isinstance(data, dict):
            raise StoreError(f"{self.name}: formato de colección inválido")
        return data

    def close(self) -> None:
        """Marca la colección como cerrada: toda lectura o escritura falla."""
        self.closed = True

    def _check_schema(self, doc: Dict[str, Any]) -> None:
        for field in self.required_fields:
            if _resolve(doc, field) is None:
                raise SchemaValidationError(self.name, field)

    def _check_unique(self, data: Dict[str, Dict[str, Any]], doc: Dict[str, Any]) -> None:
        for field in self.unique_fields:
            value = _resolve(doc, field)
            if value is None:
                continue
            for other_id, other in data.items():
                if other_id != doc['_id'] and _resolve(other, field) == value:
                    raise DuplicateKeyError(self.name, field, value)

    # =========================================================================
    # ESCRITURA
    # =========================================================================

    def insert_one(self, doc: Dict[str, Any]) -> str:
        """
        Inserta un documento nuevo.

        Args:
            doc: Documento a insertar (si no trae _id se genera uno)

        Returns:
            _id del documento insertado

        Raises:
            DuplicateKeyError, SchemaValidationError, StoreError
        """
        new_doc = copy.deepcopy(doc)
        if not new_doc.get('_id'):
            new_doc['_id'] = new_object_id()
        with self._file_lock:
            data = self._load()
            if new_doc['_id'] in data:
                raise DuplicateKeyError(self.name, '_id', new_doc['_id'])
            self._check_schema(new_doc)
            self._check_unique(data, new_doc)
            data[new_doc['_id']] = new_doc
            self._write_raw(data)
        return new_doc['_id']

    def update_one(self, doc_id: str, fields: Dict[str, Any]) -> int:
        """
        Actualiza campos de un documento ($set).

        Returns:
            Cantidad de documentos modificados (0 si no existe o no cambió)
        """
        with self._file_lock:
            data = self._load()
            current = data.get(doc_id)
            if current is None:
                return 0
            updated = dict(current)
            updated.update(copy.deepcopy(fields))
            updated['_id'] = doc_id
            if updated == current:
                return 0
            self._check_schema(updated)
            self._check_unique(data, updated)
            data[doc_id] = updated
            self._write_raw(data)
        return 1

    def delete_one(self, doc_id: str) -> int:
        """Elimina un documento. Retorna la cantidad eliminada (0 o 1)."""
        with self._file_lock:
            data = self._load()
            if data.pop(doc_id, None) is None:
                return 0
            self._write_raw(data)
        return 1

    # =========================================================================
    # LECTURA
    # =========================================================================

    def find(
        self,
        query: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 0
    ) -> List[Dict[str, Any]]:
        """
        Busca documentos en orden de inserción.

        Args:
            query: Filtro (ver encabezado del módulo)
            skip: Documentos a saltar
            limit: Máximo de documentos (0 = sin límite)
        """
        found = [doc for doc in self._load().values() if matches(doc, query)]
        found = found[skip:]
        if limit > 0:
            found = found[:limit]
        return copy.deepcopy(found)

    def find_one(self, query: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """Primer documento que coincide con el filtro, o None."""
        found = self.find(query, limit=1)
        return found[0] if found else None

    def find_by_id(self, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self._load().get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        if not query:
            return len(self._load())
        return len(self.find(query))


# ==============================================================================
# ALMACÉN
# ==============================================================================

class DocumentStore:
    """
    Conjunto de colecciones dentro de un directorio de datos.

    Uso:
        store = DocumentStore('/ruta/data')
        hr = store.collection('hr', unique_fields=['email'])
        ...
        store.close()
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        self._collections: Dict[str, DocumentCollection] = {}
        self._closed = False
        os.makedirs(data_dir, exist_ok=True)
        logger.info("Almacén de documentos abierto en %s", data_dir)

    def collection(
        self,
        name: str,
        unique_fields: Iterable[str] = (),
        required_fields: Iterable[str] = ()
    ) -> DocumentCollection:
        """Obtiene (o crea) una colección."""
        if self._closed:
            raise StoreError("El almacén de documentos está cerrado")
        if name not in self._collections:
            file_path = os.path.join(self.data_dir, f"{name}.json")
            self._collections[name] = DocumentCollection(
                name, file_path, unique_fields, required_fields
            )
        return self._collections[name]

    def close(self) -> None:
        """Cierra y libera las colecciones abiertas."""
        if not self._closed:
            for collection in self._collections.values():
                collection.close()
            self._collections.clear()
            self._closed = True
            logger.info("Almacén de documentos cerrado")

    @property
    def closed(self) -> bool:
        return self._closed
