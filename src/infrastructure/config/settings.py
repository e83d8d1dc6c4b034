"""Application Settings"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    アプリケーション設定

    12-Factor App の Config 原則に従い、
    すべての設定は環境変数から取得する。
    """

    model_config = SettingsConfigDict(
        env_prefix="MRAU_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    service_name: str = "mrau-pets"
    environment: str = "development"
    log_level: str = "INFO"

    # AWS
    aws_region: str = "eu-central-1"

    # DynamoDB
    pets_table: str = "mrau-pets"

    # S3
    images_bucket: str = "mrau-assets"

    # 画像の制限
    max_images: int = 10
    max_image_bytes: int = 5 * 1024 * 1024

    # botocore (秒)
    connect_timeout: float = 2.0
    read_timeout: float = 5.0
    max_attempts: int = 3


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()
