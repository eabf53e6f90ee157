"""
Configuración de base de datos.
"""
from jsonform.infrastructure.database.base import Base

__all__ = ["Base"]
