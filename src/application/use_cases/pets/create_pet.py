"""Create Pet Use Case"""
from __future__ import annotations

from dataclasses import dataclass, field
from uuid import NAMESPACE_DNS, UUID, uuid4, uuid5

import structlog

from src.application.ports.gateways import IStorageGateway
from src.application.ports.repositories import DuplicatePetError, IPetRepository
from src.domain.pets.entities import Pet
from src.domain.pets.value_objects import PetImage

logger = structlog.get_logger()

PET_ID_NAMESPACE = uuid5(NAMESPACE_DNS, "pets.mrau")


class UploadError(Exception):
    """画像アップロードエラー"""

    pass


class PersistenceError(Exception):
    """Pet 保存エラー"""

    pass


def pet_id_for(idempotency_key: str | None) -> UUID:
    """冪等キーがあれば決定的な ID、なければランダムな ID"""
    if idempotency_key:
        return uuid5(PET_ID_NAMESPACE, idempotency_key)
    return uuid4()


@dataclass
class CreatePetInput:
    """作成入力DTO"""

    name: str
    email: str
    message: str
    images: list[PetImage] = field(default_factory=list)
    idempotency_key: str | None = None


@dataclass
class CreatePetOutput:
    """作成出力DTO"""

    pet_id: UUID
    image_keys: list[str]


class CreatePetUseCase:
    """
    Pet 作成 ユースケース

    0. 冪等キー付きの再送なら既存の Pet を確認して中止
    1. 画像を S3 にアップロード（1枚でも失敗したら全体を中止）
    2. Pet を DynamoDB に保存
    3. 保存に失敗したらアップロード済みの画像を削除
    """

    def __init__(
        self,
        pet_repository: IPetRepository,
        storage_gateway: IStorageGateway,
    ):
        self._pet_repo = pet_repository
        self._storage = storage_gateway

    async def execute(self, input_data: CreatePetInput) -> CreatePetOutput:
        """ユースケースを実行"""
        pet = Pet.create(
            name=input_data.name,
            email=input_data.email,
            message=input_data.message,
            pet_id=pet_id_for(input_data.idempotency_key),
        )
        log = logger.bind(pet_id=str(pet.id))
        log.info("create_pet_started", image_count=len(input_data.images))

        # 0. 冪等キーの再送は画像をアップロードする前に弾く
        if input_data.idempotency_key:
            try:
                exists = await self._pet_repo.exists(pet.id)
            except Exception as e:
                log.error("pet_lookup_failed", error=str(e))
                raise PersistenceError("Could not save pet") from e
            if exists:
                log.warning("create_pet_duplicate")
                raise DuplicatePetError(f"Pet {pet.id} already exists")

        # 1. 画像をアップロード
        uploaded: list[str] = []
        try:
            for image in input_data.images:
                key = image.object_key(pet.id)
                if key in uploaded:
                    continue
                await self._storage.upload(
                    key=key,
                    data=image.content,
                    content_type=image.content_type,
                )
                uploaded.append(key)
        except Exception as e:
            log.error("image_upload_failed", error=str(e), uploaded=len(uploaded))
            await self._discard_images(uploaded, log)
            raise UploadError("Could not store pet images") from e

        pet.attach_images(uploaded)

        # 2. DynamoDB に保存
        try:
            await self._pet_repo.add(pet)
        except DuplicatePetError:
            # 同時実行で先に保存された。同じキーの画像は既存の Pet と共有している可能性がある
            log.warning("create_pet_duplicate", race=True)
            raise
        except Exception as e:
            log.error("pet_save_failed", error=str(e))
            await self._discard_images(uploaded, log)
            raise PersistenceError("Could not save pet") from e

        log.info("create_pet_completed", image_keys=pet.image_keys)
        return CreatePetOutput(pet_id=pet.id, image_keys=list(pet.image_keys))

    async def _discard_images(self, keys: list[str], log) -> None:
        """アップロード済み画像を削除（ベストエフォート）"""
        for key in keys:
            try:
                deleted = await self._storage.delete(key)
            except Exception:
                log.exception("image_cleanup_failed", key=key)
                continue
            if not deleted:
                log.warning("image_cleanup_failed", key=key)
