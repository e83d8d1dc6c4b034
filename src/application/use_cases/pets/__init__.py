"""Pet Use Cases"""
from .create_pet import (
    CreatePetInput,
    CreatePetOutput,
    CreatePetUseCase,
    PersistenceError,
    UploadError,
    pet_id_for,
)

__all__ = [
    "CreatePetUseCase",
    "CreatePetInput",
    "CreatePetOutput",
    "UploadError",
    "PersistenceError",
    "pet_id_for",
]
