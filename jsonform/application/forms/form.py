"""
Formulario base.

Un formulario enlaza una entidad con un diccionario de opciones y asigna
sobre ella un documento de entrada (p.ej. JSON decodificado). Solo se
escriben los atributos y asociaciones declarados; cualquier otra clave
se ignora.

Uso:
    class EmployeeForm(Form):
        model_class = Employee

    EmployeeForm.attributes("name", "monthly_pay")
    EmployeeForm.embeds_many("employees", EmployeeForm)
    EmployeeForm.embeds_one("task", define=lambda form: form.attributes("title"))

    form = EmployeeForm.from_attributes({"name": "Ana", "monthlyPay": 10}, store=store)
    form.save()
"""
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Tuple

from loguru import logger

from jsonform.core.config import settings
from jsonform.domain.entities.association import AssociationDescriptor, Cardinality
from jsonform.domain.entities.form_definition import FormDefinition
from jsonform.domain.repositories.entity_store import IEntityStore
from jsonform.application.forms.associations import build_reconciler
from jsonform.shared.exceptions.domain import (
    ConfigurationException,
    PersistenceException,
    TypeMismatchException,
)
from jsonform.shared.utils.key_normalizer import to_snake_case


class Form:
    """
    Formulario base para asignar documentos anidados sobre entidades.

    La definicion (atributos y asociaciones) vive en la clase y se comparte
    entre instancias. Cada instancia guarda {model, options, store}; las
    opciones se pasan tal cual (mismo objeto) a los formularios anidados.
    """

    model_class: Optional[type] = None
    definition: FormDefinition = FormDefinition()

    def __init__(
        self,
        model: Any,
        options: Optional[Dict[str, Any]] = None,
        store: Optional[IEntityStore] = None,
        definition: Optional[FormDefinition] = None
    ):
        """
        Args:
            model: Entidad sobre la que se asigna
            options: Opciones compartidas con los formularios anidados
            store: Entity store para busquedas y persistencia
            definition: Definicion a usar en lugar de la de la clase
        """
        self.model = model
        self.options = {} if options is None else options
        self.store = store
        if definition is not None:
            self.definition = definition

    def __repr__(self):
        return f"<{type(self).__name__}(model={self.model!r})>"

    # ------------------------------------------------------------------
    # Declaracion
    # ------------------------------------------------------------------

    @classmethod
    def attributes(cls, *names: str) -> None:
        """Agrega atributos asignables (se acumulan entre llamadas)."""
        cls.definition = cls.definition.with_attributes(*names)

    @classmethod
    def assigned_attributes(cls) -> Tuple[str, ...]:
        return cls.definition.attributes

    @classmethod
    def associations(cls) -> Dict[str, AssociationDescriptor]:
        return cls.definition.associations_by_name()

    @classmethod
    def embeds_many(
        cls,
        name: str,
        form_class: Optional[type] = None,
        *,
        define: Optional[Callable[[type], None]] = None,
        reconciler: Optional[type] = None
    ) -> AssociationDescriptor:
        """
        Declara una coleccion embebida.

        Args:
            name: Nombre de la relacion en el modelo
            form_class: Formulario de los hijos (puede ser la propia clase)
            define: Si no hay form_class, recibe el formulario anonimo para declararlo
            reconciler: Subclase de EmbedsManyAssociation con hooks propios

        Returns:
            AssociationDescriptor: Asociacion registrada
        """
        return cls._register_association(
            name,
            Cardinality.MANY,
            form_class,
            define=define,
            reconciler=reconciler
        )

    @classmethod
    def embeds_one(
        cls,
        name: str,
        form_class: Optional[type] = None,
        *,
        parent: bool = False,
        define: Optional[Callable[[type], None]] = None,
        model_class: Optional[type] = None,
        reconciler: Optional[type] = None
    ) -> AssociationDescriptor:
        """
        Declara una relacion de valor unico embebida.

        Args:
            name: Nombre de la relacion en el modelo
            form_class: Formulario del destino
            parent: La relacion apunta al lado dueño (belongs-to)
            define: Si no hay form_class, recibe el formulario anonimo para declararlo
            model_class: Tipo destino explicito; si falta se lee del mapper
            reconciler: Subclase de EmbedsOneAssociation con hooks propios

        Returns:
            AssociationDescriptor: Asociacion registrada
        """
        return cls._register_association(
            name,
            Cardinality.ONE,
            form_class,
            define=define,
            parent=parent,
            model_class=model_class,
            reconciler=reconciler
        )

    @classmethod
    def _register_association(
        cls,
        name: str,
        cardinality: Cardinality,
        form_class: Optional[type],
        define: Optional[Callable[[type], None]] = None,
        **kwargs
    ) -> AssociationDescriptor:
        if form_class is None:
            form_class = cls._inline_form(name, define)
        elif not _is_form_class(form_class):
            raise ConfigurationException(
                f"El formulario de '{name}' debe heredar de Form",
                details={"association": name, "form_class": repr(form_class)}
            )

        descriptor = AssociationDescriptor(
            name=name,
            cardinality=cardinality,
            form_class=form_class,
            **kwargs
        )
        cls.definition = cls.definition.with_association(descriptor)
        return descriptor

    @classmethod
    def _inline_form(cls, name: str, define: Optional[Callable[[type], None]]) -> type:
        # Formulario anonimo con su propia definicion, independiente de cls
        class_name = f"{cls.__name__}_{name}_form"
        form_class = type(class_name, (Form,), {"definition": FormDefinition()})
        if define is not None:
            define(form_class)
        return form_class

    # ------------------------------------------------------------------
    # Asignacion
    # ------------------------------------------------------------------

    def assign(self, data: Mapping) -> None:
        """
        Asigna el documento sobre el modelo.

        Las claves se normalizan a snake_case; las asociaciones declaradas se
        delegan a su reconciliador, los atributos declarados se escriben
        directamente y el resto se ignora.

        Raises:
            TypeMismatchException: Si data (o un sub-documento) no tiene la forma esperada
        """
        if not isinstance(data, Mapping):
            raise TypeMismatchException(type(self).__name__, "un objeto", data)

        for key, value in data.items():
            name = to_snake_case(key) if settings.NORMALIZE_KEYS else key

            descriptor = self.definition.association(name)
            if descriptor is not None:
                reconciler = build_reconciler(descriptor, self.model, self.options, self._require_store())
                reconciler.assign(value)
            elif self.definition.accepts_attribute(name):
                setattr(self.model, name, value)

    # ------------------------------------------------------------------
    # Persistencia
    # ------------------------------------------------------------------

    def update_attributes(self, data: Mapping) -> bool:
        """Asigna y guarda. Devuelve False si el guardado falla."""
        self.assign(data)
        return self.save()

    def update_attributes_or_raise(self, data: Mapping) -> None:
        """
        Asigna y guarda.

        Raises:
            PersistenceException: Si el guardado falla
        """
        self.assign(data)
        self.save_or_raise()

    def save(self) -> bool:
        try:
            return self._require_store().save(self.model)
        except PersistenceException as e:
            logger.warning(f"{type(self).__name__}: no se pudo guardar: {e.message}")
            return False

    def save_or_raise(self) -> None:
        if not self._require_store().save(self.model):
            raise PersistenceException(type(self.model).__name__)

    def _require_store(self) -> IEntityStore:
        if self.store is None:
            raise ConfigurationException(
                f"{type(self).__name__} necesita un entity store",
                details={"form": type(self).__name__}
            )
        return self.store

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def form_for(cls, data: Dict[str, Any]) -> Optional[type]:
        """
        Hook para elegir otro formulario segun el documento.
        Puede quitar de data la marca que usa. None mantiene cls.
        """
        return None

    @classmethod
    def resolve_model_class(cls, store: IEntityStore) -> type:
        """
        Tipo de entidad del formulario.
        Si model_class no esta definido se infiere del nombre (EmployeeForm -> Employee).

        Raises:
            ConfigurationException: Si no se puede resolver
        """
        if cls.model_class is not None:
            return cls.model_class

        name = cls.__name__
        if name.endswith("Form") and len(name) > len("Form"):
            model_class = store.resolve_type(name[:-len("Form")])
            if model_class is not None:
                return model_class

        raise ConfigurationException(
            f"No se pudo inferir el modelo de {name}; define model_class",
            details={"form": name}
        )

    @classmethod
    def from_attributes(
        cls,
        data: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
        *,
        store: Optional[IEntityStore] = None
    ) -> "Form":
        """
        Construye un formulario para el documento: busca la entidad por ID o
        crea una nueva, y asigna el documento completo.

        Args:
            data: Documento de entrada
            options: Opciones del formulario; "base" cambia el tipo de entidad
            store: Entity store

        Returns:
            Form: Formulario enlazado (la entidad esta en form.model)
        """
        data = {} if data is None else data
        options = {} if options is None else options
        if not isinstance(data, Mapping):
            raise TypeMismatchException(cls.__name__, "un objeto", data)
        if store is None:
            raise ConfigurationException(
                f"{cls.__name__}.from_attributes necesita un entity store",
                details={"form": cls.__name__}
            )

        form_class = cls.form_for(data)
        if form_class is None:
            form_class = cls
        elif not _is_form_class(form_class):
            raise ConfigurationException(
                f"{cls.__name__}.form_for devolvio un formulario invalido: {form_class!r}",
                details={"form": cls.__name__, "override": repr(form_class)}
            )

        model_class = options.get("base") or form_class.resolve_model_class(store)
        model = _find_or_new(store, model_class, data.get(settings.ID_FIELD))

        form = form_class(model, options, store=store)
        form.assign(data)
        return form


def _is_form_class(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, Form)


def _find_or_new(store: IEntityStore, model_class: type, entity_id: Any) -> Any:
    if entity_id is not None:
        model = store.find_by_id(model_class, entity_id)
        if model is not None:
            return model
    return store.new(model_class, {settings.ID_FIELD: entity_id})
