"""
Tests unitarios para SqlAlchemyEntityStore.
"""
import pytest
from sqlalchemy import inspect

from jsonform import Cardinality, ConfigurationException, PersistenceException, SqlAlchemyEntityStore
from tests.models import Employee, Task


class TestRelationMetadata:
    """Tests para relation_target y resolve_type."""

    def test_collection_relation(self, store):
        assert store.relation_target(Employee, "employees") == (Cardinality.MANY, Employee)

    def test_scalar_relations(self, store):
        assert store.relation_target(Employee, "task") == (Cardinality.ONE, Task)
        assert store.relation_target(Task, "employee") == (Cardinality.ONE, Employee)

    def test_unknown_relation(self, store):
        with pytest.raises(ConfigurationException) as exc_info:
            store.relation_target(Employee, "name")

        assert exc_info.value.details == {"model": "Employee", "relation": "name"}

    def test_unmapped_class(self, store):
        with pytest.raises(ConfigurationException):
            store.relation_target(dict, "items")

    def test_resolve_type(self, store):
        assert store.resolve_type("Employee") is Employee
        assert store.resolve_type("Nope") is None


class TestConstruction:
    """Tests para new, build y find_by_id."""

    def test_new_drops_null_seed_values(self, store):
        task = store.new(Task, {"id": None, "title": "t"})

        assert task.id is None
        assert task.title == "t"

    def test_build_attaches_child(self, store, leader):
        child = store.build(leader, "employees", {"id": 40})

        assert child.id == 40
        assert leader.employees[-1] is child
        assert child.leader is leader

    def test_find_by_id(self, store, leader):
        assert store.find_by_id(Employee, leader.id) is leader
        assert store.find_by_id(Employee, 999) is None

    def test_identity(self, store, leader):
        assert store.identity(leader) == leader.id
        assert store.identity(object()) is None


class TestRemoval:
    """Tests para las marcas de eliminacion."""

    def test_marks_are_idempotent(self, store, employee):
        store.mark_for_removal(employee)
        store.mark_for_removal(employee)

        assert store.is_marked_for_removal(employee)
        assert len(store._marked) == 1

    def test_marked_entities_stay_in_collection_until_save(self, store, leader, employee):
        store.mark_for_removal(employee, leader, "employees")

        assert leader.employees == [employee]

        store.save(leader)

        assert leader.employees == []
        assert inspect(employee).was_deleted

    def test_unmarked_entities_are_kept(self, store, leader, employee):
        store.mark_for_removal(employee, leader, "employees")
        store.unmark_for_removal(employee)

        store.save(leader)

        assert not store.is_marked_for_removal(employee)
        assert not inspect(employee).was_deleted
        assert leader.employees == [employee]

    def test_marks_survive_a_failed_save(self, store, leader, employee):
        store.mark_for_removal(employee, leader, "employees")

        with pytest.raises(PersistenceException):
            store.save(Task())

        assert store.is_marked_for_removal(employee)

        store.save(leader)

        assert inspect(employee).was_deleted
        assert not store.is_marked_for_removal(employee)

    def test_pending_entities_are_expunged(self, store, db_session, leader):
        child = store.build(leader, "employees", {})
        store.mark_for_removal(child, leader, "employees")

        store.save(leader)

        assert child not in db_session
        assert db_session.query(Employee).count() == 1


class TestSave:
    """Tests para save."""

    def test_commits_by_default(self, store, db_session):
        task = Task(title="t")

        assert store.save(task) is True
        assert inspect(task).persistent
        assert db_session.query(Task).count() == 1

    def test_flush_only_when_commit_is_disabled(self, db_session):
        store = SqlAlchemyEntityStore(db_session, commit=False)
        task = Task(title="t")

        store.save(task)

        assert inspect(task).persistent
        db_session.rollback()
        assert db_session.query(Task).count() == 0
