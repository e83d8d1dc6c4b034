"""S3 Gateway Implementation"""
from __future__ import annotations

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError
import structlog

from src.application.ports.gateways import IStorageGateway

logger = structlog.get_logger()


class S3Gateway(IStorageGateway):
    """
    S3 Gateway

    Amazon S3 を使用したストレージサービス。
    キーは呼び出し側で決定的に生成されるため、put_object のリトライは安全。
    """

    def __init__(
        self,
        bucket_name: str,
        region: str = "eu-central-1",
        config: Config | None = None,
    ):
        self.bucket_name = bucket_name
        self.region = region
        self._client = boto3.client("s3", region_name=region, config=config)

    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        ファイルをアップロード

        Args:
            key: S3オブジェクトキー
            data: ファイルデータ
            content_type: Content-Type

        Returns:
            str: S3 URI
        """
        log = logger.bind(bucket=self.bucket_name, key=key)
        log.info("upload_started", size=len(data))

        try:
            self._client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type,
            )

            uri = f"s3://{self.bucket_name}/{key}"
            log.info("upload_completed", uri=uri)
            return uri

        except ClientError as e:
            log.error("upload_failed", error=str(e))
            raise

    async def delete(self, key: str) -> bool:
        """
        ファイルを削除

        Args:
            key: S3オブジェクトキー

        Returns:
            bool: 成功したかどうか
        """
        log = logger.bind(bucket=self.bucket_name, key=key)
        log.info("delete_started")

        try:
            self._client.delete_object(
                Bucket=self.bucket_name,
                Key=key,
            )

            log.info("delete_completed")
            return True

        except ClientError as e:
            log.error("delete_failed", error=str(e))
            return False
