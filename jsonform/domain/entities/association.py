"""
Entidad de dominio: AssociationDescriptor.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Cardinality(str, Enum):
    """Cardinalidad de una asociacion embebida."""
    ONE = "one"
    MANY = "many"


@dataclass(frozen=True)
class AssociationDescriptor:
    """
    Metadatos estaticos de una asociacion declarada en un formulario.
    
    Attributes:
        name: Nombre de la relacion en el modelo
        cardinality: ONE (embeds_one) o MANY (embeds_many)
        form_class: Formulario usado para los sub-documentos
        parent: La asociacion apunta al lado propietario (belongs-to)
        model_class: Tipo de entidad explicito para embeds_one
        reconciler: Clase de reconciliador alternativa (hooks personalizados)
    """
    
    name: str
    cardinality: Cardinality
    form_class: Any
    parent: bool = False
    model_class: Optional[type] = None
    reconciler: Optional[type] = None
    
    @property
    def is_many(self) -> bool:
        return self.cardinality == Cardinality.MANY
