"""
Base declarativa de SQLAlchemy.

Los modelos que se asignan con formularios deben registrarse aqui (o en la
base que se pase al entity store) para poder inferir su clase por nombre.
"""
from sqlalchemy.orm import declarative_base


# Base para modelos de SQLAlchemy
Base = declarative_base()
