"""
Create Pet Lambda Handler

API Gateway (POST /pets) からのリクエストで「podopieczny」を登録する。

処理:
1. JSON ボディを解析・検証
2. 画像を S3 にアップロード
3. Pet を DynamoDB に保存
4. CORS ヘッダー付きのレスポンスを返す

例外はすべてこのハンドラで捕捉し、レスポンスに変換する。
"""
from __future__ import annotations

import asyncio
import base64
import binascii
import json
from functools import lru_cache
from typing import Any
from uuid import uuid4

from botocore.config import Config
import structlog

from src.application.ports.repositories import DuplicatePetError
from src.application.use_cases.pets import (
    CreatePetUseCase,
    PersistenceError,
    UploadError,
)
from src.infrastructure.config import get_settings
from src.infrastructure.gateways import S3Gateway
from src.infrastructure.logging import configure_logging
from src.infrastructure.repositories import DynamoDBPetRepository
from src.presentation.schemas import (
    ParseError,
    ValidationError,
    parse_body,
    validate_create_pet,
)

settings = get_settings()
configure_logging(settings.log_level)
logger = structlog.get_logger()

CORS_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Headers': 'Origin,Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token',
    'Access-Control-Allow-Methods': 'GET,OPTIONS,POST',
    'Access-Control-Allow-Origin': '*',
}

IDEMPOTENCY_HEADER = 'idempotency-key'

SUCCESS_MESSAGE = 'Podopieczny został stworzony.'


@lru_cache()
def get_use_case() -> CreatePetUseCase:
    """ユースケースを組み立て（ウォームスタート間で再利用）"""
    boto_config = Config(
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        retries={'max_attempts': settings.max_attempts, 'mode': 'standard'},
    )
    return CreatePetUseCase(
        pet_repository=DynamoDBPetRepository(
            table_name=settings.pets_table,
            region=settings.aws_region,
            config=boto_config,
        ),
        storage_gateway=S3Gateway(
            bucket_name=settings.images_bucket,
            region=settings.aws_region,
            config=boto_config,
        ),
    )


def create_response(status_code: int, body: dict) -> dict:
    """Lambda プロキシ統合のレスポンスを作成"""
    return {
        'statusCode': status_code,
        'headers': dict(CORS_HEADERS),
        'body': json.dumps(body, ensure_ascii=False),
        'isBase64Encoded': False,
    }


def success(message: str) -> dict:
    return create_response(200, {'message': message})


def error(status_code: int, message: str) -> dict:
    return create_response(status_code, {'error': message})


def _raw_body(event: dict) -> Any:
    body = event.get('body')
    if event.get('isBase64Encoded') and isinstance(body, str):
        try:
            return base64.b64decode(body, validate=True)
        except binascii.Error as e:
            raise ParseError(str(e)) from e
    return body


def _idempotency_key(event: dict) -> str | None:
    headers = event.get('headers')
    if not isinstance(headers, dict):
        return None
    for name, value in headers.items():
        if name.lower() == IDEMPOTENCY_HEADER and value:
            return value
    return None


def lambda_handler(event: dict, context: Any) -> dict:
    """Lambda エントリポイント"""
    request_id = getattr(context, 'aws_request_id', None) or str(uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        service=settings.service_name,
        environment=settings.environment,
    )

    try:
        if not isinstance(event, dict):
            raise ParseError('Request envelope must be a JSON object')

        # ボディ（画像の base64）はログに出さない
        logger.info(
            'create_pet_received',
            path=event.get('path'),
            method=event.get('httpMethod'),
        )

        body = parse_body(_raw_body(event))
        request = validate_create_pet(
            body,
            max_images=settings.max_images,
            max_image_bytes=settings.max_image_bytes,
        )
        output = asyncio.run(
            get_use_case().execute(request.to_input(_idempotency_key(event)))
        )

    except ParseError as e:
        logger.warning('invalid_json', error=str(e))
        return error(400, str(e))

    except ValidationError as e:
        logger.warning('invalid_request', fields=e.fields)
        return error(400, str(e))

    except DuplicatePetError:
        return error(409, 'Pet already exists')

    except (UploadError, PersistenceError) as e:
        logger.error('create_pet_failed', error=str(e), cause=repr(e.__cause__))
        return error(502, str(e))

    except Exception:
        logger.exception('unhandled_error')
        return error(500, 'Internal server error')

    logger.info('create_pet_succeeded', pet_id=str(output.pet_id), images=len(output.image_keys))
    return success(SUCCESS_MESSAGE)
