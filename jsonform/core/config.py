"""
Configuracion central de jsonform.
Gestiona variables de entorno y valores por defecto.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Clase de configuracion de la libreria.
    Lee variables de entorno (o un archivo .env) y proporciona valores por defecto.
    
    - ID_FIELD: nombre de la clave de identidad en documentos y modelos
    - NORMALIZE_KEYS: convierte claves camelCase a snake_case antes de asignar
    - COMMIT_ON_SAVE: si es False el entity store solo hace flush y el caller
      controla la transaccion
    """
    
    # Configuracion general
    APP_NAME: str = Field(default="jsonform")
    
    # Asignacion de formularios
    ID_FIELD: str = Field(default="id")
    NORMALIZE_KEYS: bool = Field(default=True)
    COMMIT_ON_SAVE: bool = Field(default=True)
    
    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="")
    
    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


# Instancia global de configuracion
settings = Settings()
