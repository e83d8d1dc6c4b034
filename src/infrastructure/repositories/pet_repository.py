"""DynamoDB Pet Repository Implementation"""
from __future__ import annotations

from uuid import UUID

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError
import structlog

from src.application.ports.repositories import DuplicatePetError, IPetRepository
from src.domain.pets.entities import Pet

logger = structlog.get_logger()


class DynamoDBPetRepository(IPetRepository):
    """
    DynamoDB ベースの Pet Repository

    パーティションキー `pk` = `PET#<id>` の単一テーブル。
    """

    def __init__(
        self,
        table_name: str = "mrau-pets",
        region: str = "eu-central-1",
        config: Config | None = None,
    ):
        self.table_name = table_name
        self._dynamodb = boto3.resource("dynamodb", region_name=region, config=config)
        self._table = self._dynamodb.Table(table_name)

    async def add(self, pet: Pet) -> None:
        """
        Pet を保存（条件付き書き込み）

        同じ pk が存在する場合は上書きせず DuplicatePetError を送出する。
        リトライされたリクエストが二重登録にならないようにするため。
        """
        log = logger.bind(table=self.table_name, pk=pet.partition_key)
        log.info("saving_pet", image_count=len(pet.image_keys))

        try:
            self._table.put_item(
                Item=pet.to_item(),
                ConditionExpression="attribute_not_exists(pk)",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                log.warning("pet_already_exists")
                raise DuplicatePetError(f"Pet {pet.id} already exists") from e
            log.error("save_pet_failed", error=str(e))
            raise

        log.info("pet_saved")

    async def exists(self, pet_id: UUID) -> bool:
        """強い整合性読み込みで pk の存在を確認"""
        pk = Pet.key_for(pet_id)
        try:
            response = self._table.get_item(
                Key={"pk": pk},
                ProjectionExpression="pk",
                ConsistentRead=True,
            )
        except ClientError as e:
            logger.error("pet_lookup_failed", table=self.table_name, pk=pk, error=str(e))
            raise
        return "Item" in response
