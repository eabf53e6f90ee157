"""
Formularios y reconciliadores de asociaciones.
"""
from .associations import (
    AssociationReconciler,
    EmbedsOneAssociation,
    EmbedsManyAssociation,
    build_reconciler,
)
from .form import Form

__all__ = [
    "Form",
    "AssociationReconciler",
    "EmbedsOneAssociation",
    "EmbedsManyAssociation",
    "build_reconciler",
]
