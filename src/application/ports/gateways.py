"""Gateway Interfaces (Ports)"""
from __future__ import annotations

from abc import ABC, abstractmethod


class IStorageGateway(ABC):
    """
    Storage Gateway Interface

    S3 などのオブジェクトストレージとの通信を抽象化する。
    """

    @abstractmethod
    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """ファイルをアップロード"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """ファイルを削除"""
        pass
