"""
Configuracion de logging con loguru.
"""
import sys

from loguru import logger

from jsonform.core.config import settings


def configure_logging(level: str = None, log_file: str = None) -> None:
    """
    Reemplaza el sink por defecto de loguru.
    
    Args:
        level: Nivel minimo (por defecto settings.LOG_LEVEL)
        log_file: Archivo de log adicional (por defecto settings.LOG_FILE,
            vacio para desactivarlo)
    """
    level = level or settings.LOG_LEVEL
    log_file = settings.LOG_FILE if log_file is None else log_file
    
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{function} - {message}",
        level=level
    )
    
    if log_file:
        logger.add(
            log_file,
            rotation="500 MB",
            retention="10 days",
            level=level
        )
    
    logger.debug(f"Logging configurado para {settings.APP_NAME} (nivel {level})")
