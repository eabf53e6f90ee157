"""
Tests unitarios para la declaracion de formularios.

Verifica que:
- attributes() acumula nombres en orden
- embeds_many / embeds_one registran descriptores en orden de declaracion
- los formularios inline tienen su propia definicion
- las subclases no modifican la definicion del padre
"""
import pytest

from jsonform import (
    AssociationDescriptor,
    Cardinality,
    ConfigurationException,
    EmbedsManyAssociation,
    Form,
    FormDefinition,
)
from tests.models import Task


class TestAttributes:
    """Tests para Form.attributes."""

    def test_adds_assigned_attributes(self, employee_form_class):
        employee_form_class.attributes("name")
        employee_form_class.attributes("age", "height")

        assert employee_form_class.assigned_attributes() == ("name", "age", "height")

    def test_duplicates_are_preserved(self, employee_form_class):
        employee_form_class.attributes("name")
        employee_form_class.attributes("name")

        assert employee_form_class.assigned_attributes() == ("name", "name")

    def test_base_form_is_not_modified(self, employee_form_class):
        employee_form_class.attributes("name")

        assert Form.assigned_attributes() == ()

    def test_subclass_extends_parent_without_changing_it(self, employee_form_class):
        employee_form_class.attributes("name")
        subclass = type("ManagerForm", (employee_form_class,), {})
        subclass.attributes("monthly_pay")

        assert subclass.assigned_attributes() == ("name", "monthly_pay")
        assert employee_form_class.assigned_attributes() == ("name",)

    def test_instances_reference_the_class_definition(self, employee_form_class, leader):
        employee_form_class.attributes("name")
        form = employee_form_class(leader)

        assert form.definition is employee_form_class.definition

    def test_later_declarations_are_visible_to_existing_instances(self, employee_form_class, leader):
        form = employee_form_class(leader)
        employee_form_class.attributes("name")

        form.assign({"name": "late"})

        assert leader.name == "late"

    def test_explicit_definition_overrides_the_class(self, employee_form_class, leader):
        employee_form_class.attributes("name")
        form = employee_form_class(leader, definition=FormDefinition(attributes=("age",)))

        form.assign({"name": "ignored", "age": 30})

        assert leader.name == "Leader"
        assert leader.age == 30


class TestEmbedsMany:
    """Tests para Form.embeds_many."""

    def test_adds_association(self, employee_form_class, task_form_class):
        employee_form_class.embeds_many("employees", employee_form_class)
        employee_form_class.embeds_many("tasks", task_form_class)

        associations = employee_form_class.associations()

        assert list(associations.keys()) == ["employees", "tasks"]
        assert isinstance(associations["tasks"], AssociationDescriptor)
        assert associations["tasks"].cardinality == Cardinality.MANY
        assert associations["tasks"].form_class is task_form_class
        assert associations["employees"].form_class is employee_form_class

    def test_adds_association_with_inline_form(self, employee_form_class):
        employee_form_class.embeds_many("employees", define=lambda form: form.attributes("name"))

        form_class = employee_form_class.associations()["employees"].form_class

        assert form_class.__bases__ == (Form,)
        assert form_class.assigned_attributes() == ("name",)
        assert employee_form_class.assigned_attributes() == ()

    def test_inline_form_without_block_accepts_nothing(self, employee_form_class):
        employee_form_class.embeds_many("employees")

        form_class = employee_form_class.associations()["employees"].form_class

        assert form_class.assigned_attributes() == ()
        assert form_class.associations() == {}

    def test_redeclaring_replaces_in_place(self, employee_form_class, task_form_class):
        employee_form_class.embeds_many("employees", employee_form_class)
        employee_form_class.embeds_many("tasks", task_form_class)
        employee_form_class.embeds_many("employees", task_form_class)

        associations = employee_form_class.associations()

        assert list(associations.keys()) == ["employees", "tasks"]
        assert associations["employees"].form_class is task_form_class

    def test_custom_reconciler_is_stored(self, employee_form_class):
        class Reconciler(EmbedsManyAssociation):
            pass

        descriptor = employee_form_class.embeds_many("employees", employee_form_class, reconciler=Reconciler)

        assert descriptor.reconciler is Reconciler

    def test_rejects_non_form_class(self, employee_form_class):
        with pytest.raises(ConfigurationException) as exc_info:
            employee_form_class.embeds_many("employees", dict)

        assert exc_info.value.error_code == "CONFIGURATION_ERROR"


class TestEmbedsOne:
    """Tests para Form.embeds_one."""

    def test_adds_association(self, employee_form_class, task_form_class):
        employee_form_class.embeds_one("employee", employee_form_class)
        employee_form_class.embeds_one("task", task_form_class)

        associations = employee_form_class.associations()

        assert len(associations) == 2
        assert list(associations.keys()) == ["employee", "task"]
        assert associations["task"].cardinality == Cardinality.ONE
        assert associations["task"].form_class is task_form_class
        assert associations["task"].parent is False

    def test_parent_flag_and_model_class(self, task_form_class, employee_form_class):
        descriptor = employee_form_class.embeds_one(
            "task", task_form_class, parent=True, model_class=Task
        )

        assert descriptor.parent is True
        assert descriptor.model_class is Task
        assert not descriptor.is_many


def test_form_definition_is_immutable():
    """Cada declaracion devuelve una definicion nueva."""
    definition = FormDefinition()
    extended = definition.with_attributes("name")

    assert definition.attributes == ()
    assert extended.attributes == ("name",)
    assert extended.association("missing") is None
