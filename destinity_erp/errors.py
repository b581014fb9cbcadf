# ==============================================================================
# TAXONOMÍA DE ERRORES
# ==============================================================================
# Toda falla de dominio se lanza como ServiceError con un tipo cerrado.
# La capa HTTP (api/error_handlers.py) traduce el tipo a un código de estado.
#
#   BUSINESS_RULE      → 409  (validaciones, sin cambios, merge inválido)
#   NOT_FOUND          → 404  (búsquedas sin resultado, credenciales)
#   VALIDATION_FAILED  → 400  (el almacén rechazó el esquema)
#   INVALID_INPUT      → 400  (parámetro requerido vacío)
#   DATABASE_ERROR     → 500
#   DUPLICATED_KEY     → 500
# ==============================================================================

from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(str, Enum):
    """Tipos de error manejados en el sistema."""
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATED_KEY = "DUPLICATED_KEY"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    BUSINESS_RULE = "BUSINESS_RULE"
    INVALID_INPUT = "INVALID_INPUT"

    @property
    def http_status(self) -> int:
        """Código HTTP asociado al tipo de error."""
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorType.INVALID_INPUT: 400,
    ErrorType.VALIDATION_FAILED: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.BUSINESS_RULE: 409,
    ErrorType.DATABASE_ERROR: 500,
    ErrorType.DUPLICATED_KEY: 500,
}


class ServiceError(Exception):
    """
    Error clasificado del dominio.

    Attributes:
        type: Tipo de error (ErrorType)
        message: Mensaje legible para el usuario final
        field: Campo que provocó el error (solo validaciones, opcional)
    """

    def __init__(self, error_type: ErrorType, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.type = error_type
        self.message = message
        self.field = field

    def __repr__(self) -> str:
        return f"ServiceError({self.type.value}, {self.message!r})"

    def to_response(self) -> Dict[str, Any]:
        """Cuerpo JSON de la respuesta HTTP."""
        return {'message': self.message, 'type': self.type.value}

    # =========================================================================
    # CONSTRUCTORES POR TIPO
    # =========================================================================

    @classmethod
    def db_error(cls, message: str) -> 'ServiceError':
        return cls(ErrorType.DATABASE_ERROR, message)

    @classmethod
    def db_duplicated_key(cls, message: str) -> 'ServiceError':
        return cls(ErrorType.DUPLICATED_KEY, message)

    @classmethod
    def db_validation_failed(cls, message: str) -> 'ServiceError':
        return cls(ErrorType.VALIDATION_FAILED, message)

    @classmethod
    def business(cls, message: str, field: Optional[str] = None) -> 'ServiceError':
        return cls(ErrorType.BUSINESS_RULE, message, field)

    @classmethod
    def not_found(cls, message: str) -> 'ServiceError':
        return cls(ErrorType.NOT_FOUND, message)

    @classmethod
    def invalid_input(cls, prop: str, entity: str) -> 'ServiceError':
        """Parámetro requerido ausente, p. ej. 'ID del usuario es requerido'."""
        return cls(ErrorType.INVALID_INPUT, f"{prop} del {entity} es requerido", prop)
