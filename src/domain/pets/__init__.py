"""Pets Domain Module"""
from .entities.pet import Pet
from .value_objects.pet_image import IMAGE_EXTENSIONS, PetImage

__all__ = [
    "Pet",
    "PetImage",
    "IMAGE_EXTENSIONS",
]
