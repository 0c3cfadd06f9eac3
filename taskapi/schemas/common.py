"""Envelope commun à toutes les réponses de l'API."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base des schémas exposés: snake_case en Python, camelCase en JSON"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None
    errors: Optional[List[str]] = None


def success_response(data=None, message: str = "Operation successful") -> dict:
    return {"success": True, "message": message, "data": data, "errors": None}


def error_response(message: str, errors: Optional[List[str]] = None) -> dict:
    return {"success": False, "message": message, "data": None, "errors": errors}
