"""
Excepciones relacionadas con la asignacion de formularios.
"""
from typing import Any, Optional

from jsonform.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio."""
    
    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class TypeMismatchException(DomainException):
    """
    Excepcion cuando el documento de entrada no tiene la forma esperada.
    Por ejemplo: un escalar donde se esperaba una lista de sub-documentos.
    """
    
    def __init__(self, field: str, expected: str, value: Any):
        super().__init__(
            message=f"'{field}' debe ser {expected}, se recibio {type(value).__name__}",
            error_code="TYPE_MISMATCH",
            details={
                "field": field,
                "expected": expected,
                "received": type(value).__name__
            }
        )
        self.status_code = 422


class ConfigurationException(DomainException):
    """Excepcion cuando la declaracion de un formulario no es valida."""
    
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details
        )
        self.status_code = 500


class PersistenceException(DomainException):
    """
    Excepcion cuando el entity store no pudo guardar el modelo.
    El error original queda disponible en __cause__.
    """
    
    def __init__(self, entity_name: str, cause: Optional[BaseException] = None):
        message = f"No se pudo guardar {entity_name}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(
            message=message,
            error_code="PERSISTENCE_ERROR",
            details={
                "entity": entity_name,
                "cause": repr(cause) if cause is not None else None
            }
        )
        self.status_code = 500
