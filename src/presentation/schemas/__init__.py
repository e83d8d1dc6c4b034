"""Request/Response Schemas"""
from .pet_schemas import (
    CreatePetRequest,
    ImagePayload,
    ParseError,
    ValidationError,
    parse_body,
    validate_create_pet,
)

__all__ = [
    "CreatePetRequest",
    "ImagePayload",
    "ParseError",
    "ValidationError",
    "parse_body",
    "validate_create_pet",
]
