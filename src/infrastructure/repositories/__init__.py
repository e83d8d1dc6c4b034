"""Infrastructure Repositories"""
from .pet_repository import DynamoDBPetRepository

__all__ = ["DynamoDBPetRepository"]
