"""Repository Interfaces (Ports)"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from src.domain.pets.entities import Pet


class DuplicatePetError(Exception):
    """同じキーの Pet が既に存在する"""

    pass


class IPetRepository(ABC):
    """
    Pet Repository Interface

    依存性逆転の原則に従い、ドメイン層から参照可能な抽象インターフェース。
    具体的な実装（DynamoDB等）はインフラ層で提供する。
    """

    @abstractmethod
    async def add(self, pet: Pet) -> None:
        """
        新しい Pet を保存

        同じキーが既に存在する場合は DuplicatePetError を送出する（上書きしない）。
        """
        pass

    @abstractmethod
    async def exists(self, pet_id: UUID) -> bool:
        """指定 ID の Pet が保存済みか確認"""
        pass
