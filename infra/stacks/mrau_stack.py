"""
Mrau Main Stack (Serverless)

S3 + API Gateway + Lambda + DynamoDB のメインスタック。
"""
from aws_cdk import (
    Stack,
    CfnOutput,
)
from constructs import Construct

from infra.stacks.data_stack import DataStack
from infra.stacks.compute_stack import ComputeStack
from infra.stacks.api_stack import ApiStack


class MrauStack(Stack):
    """Mrau のメインスタック (Serverless)。"""

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Data Stack (S3, DynamoDB)
        self.data_stack = DataStack(self, 'Data')

        # Compute Stack (Lambda Functions)
        self.compute_stack = ComputeStack(
            self, 'Compute',
            pets_table=self.data_stack.pets_table,
            assets_bucket=self.data_stack.assets_bucket,
        )

        # API Stack (API Gateway)
        self.api_stack = ApiStack(
            self, 'Api',
            assets_bucket=self.data_stack.assets_bucket,
            create_pet_fn=self.compute_stack.create_pet_fn,
        )

        # Outputs
        CfnOutput(self, 'ApiEndpoint', value=self.api_stack.api_url)
        CfnOutput(self, 'AssetsBucketName', value=self.data_stack.assets_bucket.bucket_name)
        CfnOutput(self, 'PetsTableName', value=self.data_stack.pets_table.table_name)
