"""Pet Entities"""
from .pet import Pet

__all__ = ["Pet"]
