"""Shared fixtures"""
import base64
import os

# ハンドラはインポート時に設定を読むため、先に環境変数を用意する
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-central-1")
os.environ.setdefault("MRAU_PETS_TABLE", "mrau-pets-test")
os.environ.setdefault("MRAU_IMAGES_BUCKET", "mrau-assets-test")
os.environ.setdefault("MRAU_LOG_LEVEL", "WARNING")

import pytest

from src.application.ports.gateways import IStorageGateway
from src.application.ports.repositories import DuplicatePetError, IPetRepository
from src.application.use_cases.pets import CreatePetUseCase
from src.domain.pets import Pet

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x01" * 24


class InMemoryStorageGateway(IStorageGateway):
    """テスト用ストレージ（fail_keys に含まれるキーのアップロードは失敗）"""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.deleted: list[str] = []
        self.upload_calls: list[str] = []
        self.fail_keys: set[str] = set()
        self.fail_after: int | None = None

    async def upload(self, key, data, content_type="application/octet-stream"):
        self.upload_calls.append(key)
        if key in self.fail_keys or (
            self.fail_after is not None and len(self.objects) >= self.fail_after
        ):
            raise RuntimeError(f"S3 unavailable for {key}")
        self.objects[key] = data
        self.content_types[key] = content_type
        return f"s3://test/{key}"

    async def delete(self, key):
        self.deleted.append(key)
        return self.objects.pop(key, None) is not None


class InMemoryPetRepository(IPetRepository):
    """テスト用リポジトリ（error を設定すると add が失敗）"""

    def __init__(self):
        self.items: dict[str, dict] = {}
        self.error: Exception | None = None

    async def add(self, pet):
        if self.error is not None:
            raise self.error
        if pet.partition_key in self.items:
            raise DuplicatePetError(f"Pet {pet.id} already exists")
        self.items[pet.partition_key] = pet.to_item()

    async def exists(self, pet_id):
        if self.error is not None:
            raise self.error
        return Pet.key_for(pet_id) in self.items


@pytest.fixture
def storage() -> InMemoryStorageGateway:
    return InMemoryStorageGateway()


@pytest.fixture
def repository() -> InMemoryPetRepository:
    return InMemoryPetRepository()


@pytest.fixture
def use_case(repository, storage) -> CreatePetUseCase:
    return CreatePetUseCase(pet_repository=repository, storage_gateway=storage)


@pytest.fixture
def png_b64() -> str:
    return base64.b64encode(PNG_BYTES).decode()


@pytest.fixture
def jpeg_b64() -> str:
    return base64.b64encode(JPEG_BYTES).decode()
