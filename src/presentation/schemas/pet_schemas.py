"""Create Pet Request Schema"""
from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from src.application.use_cases.pets import CreatePetInput
from src.domain.pets.value_objects import IMAGE_EXTENSIONS, PetImage

DEFAULT_MAX_IMAGES = 10
DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
DATA_URL_PATTERN = re.compile(r"^data:(?P<type>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


class ParseError(Exception):
    """リクエストボディが JSON として解析できない"""

    pass


class ValidationError(Exception):
    """必須フィールドの欠落・不正"""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Invalid fields: {', '.join(fields)}")


def _limit(info: ValidationInfo, name: str, default: int) -> int:
    return (info.context or {}).get(name, default)


class ImagePayload(BaseModel):
    """
    画像ペイロード

    `data` は base64 文字列、または `data:<type>;base64,<payload>` 形式の Data URL。
    Data URL の場合 `content_type` は省略できる。
    """

    model_config = ConfigDict(extra="forbid")

    content_type: str | None = None
    data: str

    def split_data(self) -> tuple[str | None, str]:
        match = DATA_URL_PATTERN.match(self.data)
        if match:
            return self.content_type or match["type"], match["payload"]
        return self.content_type, self.data

    @model_validator(mode="after")
    def check_image(self, info: ValidationInfo) -> ImagePayload:
        content_type, payload = self.split_data()
        if content_type not in IMAGE_EXTENSIONS:
            raise ValueError(f"Unsupported content type: {content_type}")
        try:
            content = base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError("Image data is not valid base64") from e
        if not content:
            raise ValueError("Image data is empty")
        max_bytes = _limit(info, "max_image_bytes", DEFAULT_MAX_IMAGE_BYTES)
        if len(content) > max_bytes:
            raise ValueError(f"Image exceeds {max_bytes} bytes")
        return self

    def to_image(self) -> PetImage:
        content_type, payload = self.split_data()
        return PetImage(content_type=content_type, content=base64.b64decode(payload))


class CreatePetRequest(BaseModel):
    """Pet 作成リクエスト（未知のフィールドは拒否）"""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=254)
    message: str = Field(max_length=2000)
    images: list[ImagePayload] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email address")
        return value

    @field_validator("images")
    @classmethod
    def check_image_count(cls, value: list[ImagePayload], info: ValidationInfo) -> list[ImagePayload]:
        max_images = _limit(info, "max_images", DEFAULT_MAX_IMAGES)
        if len(value) > max_images:
            raise ValueError(f"At most {max_images} images are allowed")
        return value

    def to_input(self, idempotency_key: str | None = None) -> CreatePetInput:
        """ユースケース入力DTOに変換"""
        return CreatePetInput(
            name=self.name,
            email=self.email,
            message=self.message,
            images=[image.to_image() for image in self.images],
            idempotency_key=idempotency_key,
        )


def parse_body(raw: Any) -> dict[str, Any]:
    """
    リクエストボディを解析

    JSON として不正な場合はデコーダのメッセージをそのまま ParseError にする。
    """
    if raw is None:
        raise ParseError("Request body is empty")
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(str(e)) from e
    try:
        body = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError as e:
        raise ParseError(str(e)) from e
    if not isinstance(body, dict):
        raise ParseError("Request body must be a JSON object")
    return body


def validate_create_pet(
    body: dict[str, Any],
    max_images: int = DEFAULT_MAX_IMAGES,
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
) -> CreatePetRequest:
    """リクエストを検証し、不正なフィールド名をまとめて ValidationError にする"""
    try:
        return CreatePetRequest.model_validate(
            body,
            context={"max_images": max_images, "max_image_bytes": max_image_bytes},
        )
    except PydanticValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) or "body" for err in e.errors()})
        raise ValidationError(fields) from e
