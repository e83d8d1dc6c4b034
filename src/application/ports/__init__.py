"""Application Ports (Interfaces)"""
from .repositories import DuplicatePetError, IPetRepository
from .gateways import IStorageGateway

__all__ = [
    "DuplicatePetError",
    "IPetRepository",
    "IStorageGateway",
]
