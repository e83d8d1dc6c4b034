"""Pet Value Objects"""
from .pet_image import IMAGE_EXTENSIONS, PetImage

__all__ = ["IMAGE_EXTENSIONS", "PetImage"]
