"""
Excepción base de jsonform.
"""
from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Excepción base de la libreria.

    status_code es una sugerencia para la capa web que consuma los
    formularios (p.ej. 422 para documentos mal formados).
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Cuerpo de respuesta listo para serializar a JSON.

        Returns:
            Dict[str, Any]: error, message y details
        """
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }
