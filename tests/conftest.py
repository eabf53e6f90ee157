"""
Configuración de fixtures para pytest.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from jsonform import Form, SqlAlchemyEntityStore
from jsonform.infrastructure.database.base import Base
from tests.models import Employee, Task


# URL de base de datos de prueba
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """
    Fixture que proporciona una sesión de base de datos para tests.
    Crea una base de datos en memoria para cada test.
    """
    engine = create_engine(TEST_DATABASE_URL, echo=False)
    Base.metadata.create_all(engine)
    
    session_factory = sessionmaker(bind=engine)
    
    with session_factory() as session:
        yield session
    
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def store(db_session):
    return SqlAlchemyEntityStore(db_session)


@pytest.fixture
def employee_form_class():
    """Formulario nuevo por test: las declaraciones no se filtran entre tests."""
    return type("EmployeeForm", (Form,), {"model_class": Employee})


@pytest.fixture
def task_form_class():
    return type("TaskForm", (Form,), {"model_class": Task})


@pytest.fixture
def leader(db_session):
    leader = Employee(name="Leader")
    db_session.add(leader)
    db_session.commit()
    return leader


@pytest.fixture
def leader_form(employee_form_class, leader, store):
    return employee_form_class(leader, store=store)


@pytest.fixture
def employee(db_session, leader):
    employee = Employee(name="Employee", leader=leader)
    db_session.add(employee)
    db_session.commit()
    return employee


@pytest.fixture
def employee2(db_session, leader, employee):
    employee2 = Employee(name="Employee 2", leader=leader)
    db_session.add(employee2)
    db_session.commit()
    return employee2


@pytest.fixture
def task(db_session, leader):
    task = Task(title="Task", employee=leader)
    db_session.add(task)
    db_session.commit()
    return task


@pytest.fixture
def do_laundry(db_session):
    do_laundry = Task(title="Do laundry")
    db_session.add(do_laundry)
    db_session.commit()
    return do_laundry
