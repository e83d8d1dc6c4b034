"""
Lambda Stack (Serverless Compute)

Lambda Functions:
- Create Pet (API Gateway POST /pets)
"""
from pathlib import Path

from aws_cdk import (
    BundlingOptions,
    NestedStack,
    Duration,
    Stack,
    aws_lambda as lambda_,
    aws_dynamodb as dynamodb,
    aws_s3 as s3,
    aws_logs as logs,
)
from constructs import Construct

PROJECT_ROOT = Path(__file__).resolve().parents[2]

ASSET_EXCLUDES = [
    'cdk.out',
    '.git',
    '.venv',
    '.env',
    'tests',
    '**/__pycache__',
    '*.md',
]


class ComputeStack(NestedStack):
    """Lambda ベースのサーバレスコンピュートスタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        pets_table: dynamodb.Table,
        assets_bucket: s3.Bucket,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # Create Pet Lambda
        # =================================================================
        # プロジェクトを依存関係ごと /asset-output にインストールする

        self.create_pet_fn = lambda_.Function(
            self, 'CreatePetFn',
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler='src.handlers.pets.create.handler.lambda_handler',
            code=lambda_.Code.from_asset(
                str(PROJECT_ROOT),
                exclude=ASSET_EXCLUDES,
                bundling=BundlingOptions(
                    image=lambda_.Runtime.PYTHON_3_12.bundling_image,
                    command=[
                        'bash', '-c',
                        'pip install --no-cache-dir . -t /asset-output '
                        '&& rm -rf /asset-output/infra',
                    ],
                ),
            ),
            memory_size=256,
            timeout=Duration.seconds(29),
            environment={
                'MRAU_ENVIRONMENT': 'production',
                'MRAU_AWS_REGION': Stack.of(self).region,
                'MRAU_PETS_TABLE': pets_table.table_name,
                'MRAU_IMAGES_BUCKET': assets_bucket.bucket_name,
            },
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        pets_table.grant_read_write_data(self.create_pet_fn)
        assets_bucket.grant_put(self.create_pet_fn)
        # 失敗時の補償削除
        assets_bucket.grant_delete(self.create_pet_fn)
