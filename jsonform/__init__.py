"""
jsonform: asignacion de documentos anidados (JSON) sobre grafos de entidades.
"""
from jsonform.application.forms import (
    Form,
    AssociationReconciler,
    EmbedsOneAssociation,
    EmbedsManyAssociation,
)
from jsonform.domain.entities import AssociationDescriptor, Cardinality, FormDefinition
from jsonform.domain.repositories.entity_store import IEntityStore
from jsonform.infrastructure.repositories import SqlAlchemyEntityStore
from jsonform.shared.exceptions import (
    AppException,
    ConfigurationException,
    PersistenceException,
    TypeMismatchException,
)

__all__ = [
    "Form",
    "AssociationReconciler",
    "EmbedsOneAssociation",
    "EmbedsManyAssociation",
    "AssociationDescriptor",
    "Cardinality",
    "FormDefinition",
    "IEntityStore",
    "SqlAlchemyEntityStore",
    "AppException",
    "ConfigurationException",
    "PersistenceException",
    "TypeMismatchException",
]
