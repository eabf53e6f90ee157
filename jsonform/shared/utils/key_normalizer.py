"""
Normalizacion de claves del documento de entrada.

Los clientes JSON suelen enviar claves en camelCase (monthlyPay) mientras
que los modelos usan snake_case (monthly_pay).
"""
import re
from typing import Any


# "HTTPServer" -> "HTTP_Server"
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
# "monthlyPay" -> "monthly_Pay"
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def to_snake_case(key: Any) -> str:
    """
    Convierte una clave camelCase a snake_case.
    
    Claves ya normalizadas o sin letras se devuelven sin cambios.
    
    Args:
        key: Clave del documento de entrada
        
    Returns:
        str: Clave canonica en snake_case
    """
    text = str(key)
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _WORD_BOUNDARY.sub(r"\1_\2", text)
    return text.lower()
