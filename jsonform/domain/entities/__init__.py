"""
Entidades de dominio.
"""
from .association import AssociationDescriptor, Cardinality
from .form_definition import FormDefinition

__all__ = ["AssociationDescriptor", "Cardinality", "FormDefinition"]
