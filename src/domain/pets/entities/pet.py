"""Pet Entity"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Pet:
    """
    ペット（エンティティ）

    里親募集フォームから登録される1件の「podopieczny」。
    画像はオブジェクトキーの参照のみを保持する。
    """

    KEY_PREFIX = "PET#"

    id: UUID = field(default_factory=uuid4)
    name: str = ""
    email: str = ""
    message: str = ""
    image_keys: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utc_now)

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        message: str,
        pet_id: UUID | None = None,
    ) -> Pet:
        """新しい Pet を作成"""
        return cls(
            id=pet_id or uuid4(),
            name=name,
            email=email,
            message=message,
        )

    def attach_images(self, keys: list[str]) -> None:
        """アップロード済み画像のキーを関連付け"""
        for key in keys:
            if key not in self.image_keys:
                self.image_keys.append(key)

    @classmethod
    def key_for(cls, pet_id: UUID) -> str:
        """パーティションキー `PET#<id>`"""
        return f"{cls.KEY_PREFIX}{pet_id}"

    @property
    def partition_key(self) -> str:
        return self.key_for(self.id)

    def to_item(self) -> dict[str, Any]:
        """DynamoDB アイテムに変換"""
        return {
            "pk": self.partition_key,
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "images": list(self.image_keys),
            "created_at": self.created_at.isoformat(),
        }
