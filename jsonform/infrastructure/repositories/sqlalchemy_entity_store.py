"""
Implementación del entity store usando SQLAlchemy ORM.
"""
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable, SQLAlchemyError
from sqlalchemy.orm import Session

from jsonform.core.config import settings
from jsonform.domain.entities.association import Cardinality
from jsonform.domain.repositories.entity_store import IEntityStore
from jsonform.infrastructure.database.base import Base
from jsonform.shared.exceptions.domain import ConfigurationException, PersistenceException


class SqlAlchemyEntityStore(IEntityStore):
    """
    Entity store sobre una sesion sincrona de SQLAlchemy.

    Las marcas de eliminacion se guardan en el store y se aplican en save():
    la entidad se saca de la coleccion duena y se elimina de la sesion.
    """

    def __init__(self, session: Session, base=None, commit: Optional[bool] = None):
        """
        Inicializa el store con una sesion de base de datos.

        Args:
            session: Sesion de SQLAlchemy
            base: Base declarativa donde se registran los modelos
            commit: Si es False, save() solo hace flush
        """
        self.session = session
        self.base = base if base is not None else Base
        self.commit = settings.COMMIT_ON_SAVE if commit is None else commit
        self._marked: List[Tuple[Any, Any, Optional[str]]] = []

    def find_by_id(self, entity_type: type, entity_id: Any) -> Optional[Any]:
        """Obtiene una entidad por su ID sin disparar autoflush."""
        with self.session.no_autoflush:
            return self.session.get(entity_type, entity_id)

    def new(self, entity_type: type, seed: Dict[str, Any]) -> Any:
        return entity_type(**self._clean_seed(seed))

    def get(self, entity: Any, relation: str) -> Any:
        # Carga perezosa de la relacion sin hacer flush de entidades a medio asignar
        with self.session.no_autoflush:
            return getattr(entity, relation)

    def set(self, entity: Any, relation: str, value: Any) -> None:
        with self.session.no_autoflush:
            setattr(entity, relation, value)

    def build(self, entity: Any, relation: str, seed: Dict[str, Any]) -> Any:
        _, target_type = self.relation_target(type(entity), relation)
        child = self.new(target_type, seed)
        self.get(entity, relation).append(child)
        return child

    def mark_for_removal(self, entity: Any, parent: Any = None, relation: Optional[str] = None) -> None:
        if self.is_marked_for_removal(entity):
            return
        self._marked.append((entity, parent, relation))

    def unmark_for_removal(self, entity: Any) -> None:
        self._marked = [mark for mark in self._marked if mark[0] is not entity]

    def is_marked_for_removal(self, entity: Any) -> bool:
        return any(marked is entity for marked, _, _ in self._marked)

    def relation_target(self, entity_type: type, relation: str) -> Tuple[Cardinality, type]:
        """
        Lee cardinalidad y tipo destino desde el mapper.

        Raises:
            ConfigurationException: Si la clase no esta mapeada o no tiene la relacion
        """
        try:
            mapper = inspect(entity_type)
        except NoInspectionAvailable as e:
            raise ConfigurationException(
                f"{entity_type.__name__} no es un modelo de SQLAlchemy",
                details={"model": entity_type.__name__}
            ) from e

        relationship = mapper.relationships.get(relation)
        if relationship is None:
            raise ConfigurationException(
                f"{entity_type.__name__} no tiene la relacion '{relation}'",
                details={"model": entity_type.__name__, "relation": relation}
            )

        cardinality = Cardinality.MANY if relationship.uselist else Cardinality.ONE
        return cardinality, relationship.mapper.class_

    def resolve_type(self, name: str) -> Optional[type]:
        for mapper in self.base.registry.mappers:
            if mapper.class_.__name__ == name:
                return mapper.class_
        return None

    def save(self, entity: Any) -> bool:
        """
        Guarda la entidad aplicando las eliminaciones pendientes.

        Las marcas solo se limpian si el commit (o flush) termina bien; tras
        un fallo siguen registradas y se aplican en el siguiente save.

        Raises:
            PersistenceException: Si SQLAlchemy falla (la sesion queda en rollback)
        """
        marked = list(self._marked)
        try:
            self.session.add(entity)
            self._apply_removals(marked)
            if self.commit:
                self.session.commit()
            else:
                self.session.flush()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error guardando {type(entity).__name__}: {e}")
            raise PersistenceException(type(entity).__name__, e) from e

        self._marked = []
        logger.debug(f"{type(entity).__name__} guardado (id={self.identity(entity)})")
        return True

    def _apply_removals(self, marked: List[Tuple[Any, Any, Optional[str]]]) -> None:
        for entity, parent, relation in marked:
            if parent is not None and relation:
                collection = self.get(parent, relation)
                if entity in collection:
                    collection.remove(entity)

            state = inspect(entity)
            if state.persistent:
                self.session.delete(entity)
            elif state.pending:
                self.session.expunge(entity)
            logger.debug(f"{type(entity).__name__} eliminado (id={self.identity(entity)})")

    @staticmethod
    def _clean_seed(seed: Dict[str, Any]) -> Dict[str, Any]:
        # Un ID nulo se omite para que la base de datos lo asigne
        return {key: value for key, value in seed.items() if value is not None}
