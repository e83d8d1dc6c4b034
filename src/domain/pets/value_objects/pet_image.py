"""Pet Image Value Object"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from uuid import UUID

# 許可される画像タイプ → 拡張子
IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

DIGEST_LENGTH = 16


@dataclass(frozen=True)
class PetImage:
    """
    ペット画像（値オブジェクト）

    画像のバイナリと Content-Type を保持する。
    オブジェクトキーは内容のハッシュから決まるため、同じ画像の再アップロードは上書きになる。
    """

    content_type: str
    content: bytes = field(repr=False)

    def __post_init__(self) -> None:
        """バリデーション"""
        if self.content_type not in IMAGE_EXTENSIONS:
            raise ValueError(
                f"Unsupported content type: {self.content_type}. "
                f"Must be one of: {sorted(IMAGE_EXTENSIONS)}"
            )
        if not self.content:
            raise ValueError("Image content cannot be empty")

    @property
    def extension(self) -> str:
        return IMAGE_EXTENSIONS[self.content_type]

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def digest(self) -> str:
        """内容の SHA-256（先頭16桁）"""
        return hashlib.sha256(self.content).hexdigest()[:DIGEST_LENGTH]

    def object_key(self, pet_id: UUID) -> str:
        """
        S3 オブジェクトキーを生成

        `<pet_id>/<digest>.<ext>` の2階層。API Gateway の
        `/assets/{folder}/{key}` からそのまま参照できる。
        """
        return f"{pet_id}/{self.digest}.{self.extension}"
