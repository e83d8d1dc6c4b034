"""CDK Stack Unit Tests (aws_cdk.assertions)"""
import aws_cdk as cdk
from aws_cdk.assertions import Match, Template
import pytest

from infra.stacks.mrau_stack import MrauStack


@pytest.fixture(scope="module")
def stack() -> MrauStack:
    # Docker によるアセットのバンドルを行わない
    app = cdk.App(context={"aws:cdk:bundling-stacks": []})
    return MrauStack(app, "MrauTestStack")


class TestMrauStack:
    def test_nested_stacks(self, stack):
        """正常: Data / Compute / Api の3つのネストスタック"""
        template = Template.from_stack(stack)

        template.resource_count_is("AWS::CloudFormation::Stack", 3)

    def test_outputs(self, stack):
        template = Template.from_stack(stack)

        template.has_output("ApiEndpoint", {})
        template.has_output("AssetsBucketName", {})
        template.has_output("PetsTableName", {})


class TestDataStack:
    def test_bucket_blocks_public_access(self, stack):
        """正常: バケットは直接公開しない"""
        template = Template.from_stack(stack.data_stack)

        template.resource_count_is("AWS::S3::Bucket", 1)
        template.has_resource_properties(
            "AWS::S3::Bucket",
            {
                "PublicAccessBlockConfiguration": {
                    "BlockPublicAcls": True,
                    "BlockPublicPolicy": True,
                    "IgnorePublicAcls": True,
                    "RestrictPublicBuckets": True,
                },
            },
        )

    def test_pets_table(self, stack):
        """正常: pk をパーティションキーとするオンデマンドテーブル"""
        template = Template.from_stack(stack.data_stack)

        template.has_resource_properties(
            "AWS::DynamoDB::Table",
            {
                "KeySchema": [{"AttributeName": "pk", "KeyType": "HASH"}],
                "BillingMode": "PAY_PER_REQUEST",
            },
        )


class TestComputeStack:
    def test_create_pet_function(self, stack):
        """正常: ハンドラと環境変数"""
        template = Template.from_stack(stack.compute_stack)

        template.has_resource_properties(
            "AWS::Lambda::Function",
            {
                "Handler": "src.handlers.pets.create.handler.lambda_handler",
                "Runtime": "python3.12",
                "Environment": {
                    "Variables": Match.object_like(
                        {
                            "MRAU_ENVIRONMENT": "production",
                            "MRAU_PETS_TABLE": Match.any_value(),
                            "MRAU_IMAGES_BUCKET": Match.any_value(),
                        }
                    )
                },
            },
        )

    def test_function_can_write_table(self, stack):
        template = Template.from_stack(stack.compute_stack)

        template.has_resource_properties(
            "AWS::IAM::Policy",
            {
                "PolicyDocument": {
                    "Statement": Match.array_with(
                        [
                            Match.object_like(
                                {
                                    "Action": Match.array_with(["dynamodb:PutItem"]),
                                    "Effect": "Allow",
                                }
                            )
                        ]
                    )
                }
            },
        )


class TestApiStack:
    def test_assets_proxy_to_s3(self, stack):
        """正常: GET /assets/{folder}/{key} は S3 への AWS 統合"""
        template = Template.from_stack(stack.api_stack)

        template.has_resource_properties("AWS::ApiGateway::Resource", {"PathPart": "assets"})
        template.has_resource_properties("AWS::ApiGateway::Resource", {"PathPart": "{folder}"})
        template.has_resource_properties("AWS::ApiGateway::Resource", {"PathPart": "{key}"})
        template.has_resource_properties(
            "AWS::ApiGateway::Method",
            {
                "HttpMethod": "GET",
                "AuthorizationType": "NONE",
                "Integration": Match.object_like(
                    {
                        "Type": "AWS",
                        "IntegrationHttpMethod": "GET",
                        "RequestParameters": {
                            "integration.request.path.folder": "method.request.path.folder",
                            "integration.request.path.key": "method.request.path.key",
                        },
                    }
                ),
            },
        )

    def test_pets_lambda_proxy(self, stack):
        """正常: POST /pets は Lambda プロキシ統合"""
        template = Template.from_stack(stack.api_stack)

        template.has_resource_properties("AWS::ApiGateway::Resource", {"PathPart": "pets"})
        template.has_resource_properties(
            "AWS::ApiGateway::Method",
            {
                "HttpMethod": "POST",
                "Integration": Match.object_like({"Type": "AWS_PROXY"}),
            },
        )

    def test_access_logging(self, stack):
        """正常: アクセスログをロググループに出力"""
        template = Template.from_stack(stack.api_stack)

        template.resource_count_is("AWS::Logs::LogGroup", 1)
        template.has_resource_properties(
            "AWS::ApiGateway::Stage",
            {
                "StageName": "prod",
                "AccessLogSetting": Match.object_like({"DestinationArn": Match.any_value()}),
            },
        )

    def test_binary_images(self, stack):
        template = Template.from_stack(stack.api_stack)

        template.has_resource_properties(
            "AWS::ApiGateway::RestApi",
            {"Name": "mrau-api", "BinaryMediaTypes": ["image/*"]},
        )

    def test_gateway_role_for_assets(self, stack):
        """正常: API Gateway が引き受ける読み取りロール"""
        template = Template.from_stack(stack.api_stack)

        template.has_resource_properties(
            "AWS::IAM::Role",
            {
                "AssumeRolePolicyDocument": Match.object_like(
                    {
                        "Statement": Match.array_with(
                            [
                                Match.object_like(
                                    {"Principal": {"Service": "apigateway.amazonaws.com"}}
                                )
                            ]
                        )
                    }
                ),
                "Description": Match.string_like_regexp("read pet images"),
            },
        )
