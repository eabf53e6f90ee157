"""
Interfaz del entity store.
Define el contrato de persistencia que consumen los formularios.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from jsonform.core.config import settings
from jsonform.domain.entities.association import Cardinality


class IEntityStore(ABC):
    """
    Interfaz del entity store.

    Los formularios nunca consultan ni guardan entidades directamente:
    toda lectura, construccion y persistencia pasa por esta interfaz.
    """

    @abstractmethod
    def find_by_id(self, entity_type: type, entity_id: Any) -> Optional[Any]:
        """
        Obtiene una entidad por su ID.

        Args:
            entity_type: Clase de la entidad
            entity_id: ID buscado

        Returns:
            Optional[Any]: Entidad encontrada o None
        """
        pass

    @abstractmethod
    def new(self, entity_type: type, seed: Dict[str, Any]) -> Any:
        """
        Construye una entidad nueva sin guardarla.

        Args:
            entity_type: Clase de la entidad
            seed: Valores iniciales (tipicamente solo el ID)

        Returns:
            Any: Entidad construida
        """
        pass

    @abstractmethod
    def save(self, entity: Any) -> bool:
        """
        Guarda la entidad (y lo que alcance por cascada).

        Returns:
            bool: True si se guardo correctamente

        Raises:
            PersistenceException: Si la persistencia falla
        """
        pass

    @abstractmethod
    def get(self, entity: Any, relation: str) -> Any:
        """Lee una relacion: entidad, None o coleccion ordenada."""
        pass

    @abstractmethod
    def set(self, entity: Any, relation: str, value: Any) -> None:
        """Reemplaza el destino de una relacion de valor unico."""
        pass

    @abstractmethod
    def build(self, entity: Any, relation: str, seed: Dict[str, Any]) -> Any:
        """
        Construye un hijo y lo agrega a la coleccion de la relacion.

        Returns:
            Any: Hijo construido y ya adjunto
        """
        pass

    @abstractmethod
    def mark_for_removal(self, entity: Any, parent: Any = None, relation: Optional[str] = None) -> None:
        """
        Marca una entidad para eliminarse en el proximo save.
        La entidad sigue en la coleccion en memoria hasta entonces.
        """
        pass

    @abstractmethod
    def unmark_for_removal(self, entity: Any) -> None:
        """Quita la marca de eliminacion (no hace nada si no estaba marcada)."""
        pass

    @abstractmethod
    def is_marked_for_removal(self, entity: Any) -> bool:
        pass

    @abstractmethod
    def relation_target(self, entity_type: type, relation: str) -> Tuple[Cardinality, type]:
        """
        Metadatos de una relacion del modelo.

        Returns:
            Tuple[Cardinality, type]: Cardinalidad y tipo destino
        """
        pass

    @abstractmethod
    def resolve_type(self, name: str) -> Optional[type]:
        """Busca una clase de entidad registrada por su nombre."""
        pass

    def identity(self, entity: Any) -> Any:
        """Devuelve la clave de identidad de la entidad."""
        return getattr(entity, settings.ID_FIELD, None)
