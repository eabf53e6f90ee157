"""
Implementaciones del entity store.
"""
from .sqlalchemy_entity_store import SqlAlchemyEntityStore

__all__ = ["SqlAlchemyEntityStore"]
