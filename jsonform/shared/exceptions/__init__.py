"""
Excepciones de jsonform.
"""
from .base import AppException
from .domain import (
    DomainException,
    TypeMismatchException,
    ConfigurationException,
    PersistenceException,
)

__all__ = [
    "AppException",
    "DomainException",
    "TypeMismatchException",
    "ConfigurationException",
    "PersistenceException",
]
