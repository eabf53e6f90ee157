"""
Entidad de dominio: FormDefinition.

Registro inmutable de atributos y asociaciones asignables de un formulario.
Cada declaracion devuelve una nueva definicion; las instancias de formulario
guardan una referencia a la definicion vigente al construirse.
"""
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from jsonform.domain.entities.association import AssociationDescriptor


@dataclass(frozen=True)
class FormDefinition:
    """
    Definicion de un formulario.
    
    attributes conserva el orden de declaracion (y los duplicados).
    associations conserva el orden de la primera declaracion de cada nombre.
    """
    
    attributes: Tuple[str, ...] = ()
    associations: Tuple[AssociationDescriptor, ...] = ()
    
    def with_attributes(self, *names: str) -> "FormDefinition":
        """Devuelve una nueva definicion con los atributos agregados al final."""
        return replace(self, attributes=self.attributes + tuple(names))
    
    def with_association(self, descriptor: AssociationDescriptor) -> "FormDefinition":
        """
        Devuelve una nueva definicion con la asociacion registrada.
        Si ya existia una asociacion con ese nombre se reemplaza en su lugar.
        """
        associations = list(self.associations)
        for index, current in enumerate(associations):
            if current.name == descriptor.name:
                associations[index] = descriptor
                break
        else:
            associations.append(descriptor)
        return replace(self, associations=tuple(associations))
    
    def association(self, name: str) -> Optional[AssociationDescriptor]:
        for descriptor in self.associations:
            if descriptor.name == name:
                return descriptor
        return None
    
    def accepts_attribute(self, name: str) -> bool:
        return name in self.attributes
    
    def associations_by_name(self) -> Dict[str, AssociationDescriptor]:
        return {descriptor.name: descriptor for descriptor in self.associations}
