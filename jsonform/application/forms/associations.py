"""
Reconciliadores de asociaciones embebidas.

Aplican el sub-documento de una asociacion declarada sobre la relacion
del modelo dueño:
- EmbedsOneAssociation: relacion de valor unico (buscar o construir, reemplazar)
- EmbedsManyAssociation: coleccion (upsert por ID y luego marcar sobrantes)
"""
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from loguru import logger

from jsonform.core.config import settings
from jsonform.domain.entities.association import AssociationDescriptor, Cardinality
from jsonform.domain.repositories.entity_store import IEntityStore
from jsonform.shared.exceptions.domain import TypeMismatchException


class AssociationReconciler(ABC):
    """
    Interfaz comun de los reconciliadores.

    Se crea uno por cada asignacion de la asociacion y se descarta despues.
    """

    def __init__(
        self,
        descriptor: AssociationDescriptor,
        parent: Any,
        form_options: Dict[str, Any],
        store: IEntityStore
    ):
        """
        Args:
            descriptor: Asociacion declarada
            parent: Modelo dueño de la relacion
            form_options: Opciones del formulario padre (se comparten, no se copian)
            store: Entity store del formulario padre
        """
        self.descriptor = descriptor
        self.name = descriptor.name
        self.parent = parent
        self.form_options = form_options
        self.store = store

    @abstractmethod
    def assign(self, data: Any) -> None:
        pass

    def _assign_child(self, child: Any, data: Mapping) -> None:
        form = self.descriptor.form_class(child, self.form_options, store=self.store)
        form.assign(data)

    def _ensure_document(self, data: Any, field: str) -> None:
        if not isinstance(data, Mapping):
            raise TypeMismatchException(field, "un objeto", data)


class EmbedsOneAssociation(AssociationReconciler):
    """Reconciliador de asociaciones de valor unico (embeds_one)."""

    def assign(self, data: Optional[Mapping]) -> None:
        if data is None:
            logger.debug(f"Limpiando relacion '{self.name}' de {type(self.parent).__name__}")
            self.store.set(self.parent, self.name, None)
            return

        self._ensure_document(data, self.name)
        child = self._find_or_build_child(data)
        # Siempre se reemplaza el destino, aunque sea la misma entidad
        self.store.set(self.parent, self.name, child)
        self._assign_child(child, data)

    def _child_class(self) -> type:
        if self.descriptor.model_class is not None:
            return self.descriptor.model_class
        _, target_type = self.store.relation_target(type(self.parent), self.name)
        return target_type

    def _find_or_build_child(self, data: Mapping) -> Any:
        child_class = self._child_class()
        child_id = data.get(settings.ID_FIELD)

        if child_id is not None:
            child = self.store.find_by_id(child_class, child_id)
            if child is not None:
                return child

        logger.debug(f"Construyendo {child_class.__name__} para '{self.name}' (id={child_id})")
        return self.store.new(child_class, {settings.ID_FIELD: child_id})


class EmbedsManyAssociation(AssociationReconciler):
    """
    Reconciliador de colecciones (embeds_many).

    Cada elemento de la lista se empareja por ID con un hijo existente o
    construye uno nuevo; los hijos que no aparecen en la lista quedan
    marcados para eliminarse en el proximo save. Una lista nula no toca
    la coleccion.
    """

    def assign(self, data: Optional[List[Mapping]]) -> None:
        if data is None:
            return
        if not isinstance(data, (list, tuple)):
            raise TypeMismatchException(self.name, "una lista", data)

        kept = self._assign_data(data)
        self._delete_children(kept)

    def child_built(self, child: Any, child_data: Mapping, position: int) -> None:
        """Hook llamado despues de resolver cada elemento."""

    def child_build_data(self, child_data: Mapping) -> Dict[str, Any]:
        """Valores con los que se construye un hijo nuevo (solo el ID)."""
        return {settings.ID_FIELD: child_data.get(settings.ID_FIELD)}

    @property
    def association(self) -> Any:
        return self.store.get(self.parent, self.name)

    def _assign_data(self, data: List[Mapping]) -> List[Any]:
        kept = []
        for position, child_data in enumerate(data):
            self._ensure_document(child_data, f"{self.name}[{position}]")
            child = self._find_child(child_data)
            if child is None:
                child = self._build_child(child_data)
            else:
                # Una asignacion anterior pudo marcarlo; vuelve a estar en la lista
                self.store.unmark_for_removal(child)
            self._assign_child(child, child_data)
            self.child_built(child, child_data, position)
            kept.append(child)
        return kept

    def _delete_children(self, kept: List[Any]) -> None:
        kept_ids = {
            self.store.identity(child) for child in kept
            if self.store.identity(child) is not None
        }
        for child in list(self.association):
            if any(child is target for target in kept):
                continue
            child_id = self.store.identity(child)
            if child_id is not None and child_id in kept_ids:
                continue
            logger.debug(f"Marcando {type(child).__name__} (id={child_id}) de '{self.name}' para eliminar")
            self.store.mark_for_removal(child, self.parent, self.name)

    def _find_child(self, child_data: Mapping) -> Optional[Any]:
        child_id = child_data.get(settings.ID_FIELD)
        if child_id is None:
            return None
        for target in self.association:
            if self.store.identity(target) == child_id:
                return target
        return None

    def _build_child(self, child_data: Mapping) -> Any:
        child = self.store.build(self.parent, self.name, self.child_build_data(child_data))
        logger.debug(f"Construido {type(child).__name__} en '{self.name}' (id={self.store.identity(child)})")
        return child


RECONCILERS = {
    Cardinality.ONE: EmbedsOneAssociation,
    Cardinality.MANY: EmbedsManyAssociation,
}


def build_reconciler(
    descriptor: AssociationDescriptor,
    parent: Any,
    form_options: Dict[str, Any],
    store: IEntityStore
) -> AssociationReconciler:
    """Selecciona el reconciliador segun la cardinalidad declarada."""
    reconciler_class = descriptor.reconciler or RECONCILERS[descriptor.cardinality]
    return reconciler_class(descriptor, parent, form_options, store)
