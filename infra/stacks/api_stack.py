"""
API Stack

API Gateway (REST):
- GET /assets/{folder}/{key} → S3 (AWS サービス統合、認証なし)
- POST /pets → Create Pet Lambda
"""
from aws_cdk import (
    NestedStack,
    RemovalPolicy,
    aws_apigateway as apigw,
    aws_iam as iam,
    aws_lambda as lambda_,
    aws_logs as logs,
    aws_s3 as s3,
)
from constructs import Construct

CORS_ALLOW_HEADERS = [
    'Origin',
    'Content-Type',
    'X-Amz-Date',
    'Authorization',
    'X-Api-Key',
    'X-Amz-Security-Token',
]
CORS_ALLOW_METHODS = ['GET', 'OPTIONS', 'POST']


class ApiStack(NestedStack):
    """API Gateway スタック。"""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        assets_bucket: s3.IBucket,
        create_pet_fn: lambda_.IFunction,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # Access Logs
        # =================================================================

        self.access_log_group = logs.LogGroup(
            self, 'ApiAccessLogs',
            retention=logs.RetentionDays.ONE_MONTH,
            removal_policy=RemovalPolicy.DESTROY,
        )

        # =================================================================
        # REST API
        # =================================================================

        self.api = apigw.RestApi(
            self, 'MrauApi',
            rest_api_name='mrau-api',
            description='Mrau REST API (assets proxy + pets)',
            binary_media_types=['image/*'],
            cloud_watch_role=True,
            deploy_options=apigw.StageOptions(
                stage_name='prod',
                logging_level=apigw.MethodLoggingLevel.INFO,
                metrics_enabled=True,
                access_log_destination=apigw.LogGroupLogDestination(self.access_log_group),
                access_log_format=apigw.AccessLogFormat.json_with_standard_fields(
                    caller=False,
                    http_method=True,
                    ip=True,
                    protocol=True,
                    request_time=True,
                    resource_path=True,
                    response_length=True,
                    status=True,
                    user=False,
                ),
                throttling_rate_limit=100,
                throttling_burst_limit=50,
            ),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_methods=CORS_ALLOW_METHODS,
                allow_headers=CORS_ALLOW_HEADERS,
            ),
        )

        # =================================================================
        # Assets Endpoint (S3 Proxy)
        # =================================================================

        # API Gateway が S3 を読むためのロール
        self.assets_role = iam.Role(
            self, 'AssetsReadRole',
            assumed_by=iam.ServicePrincipal('apigateway.amazonaws.com'),
            description='Allows API Gateway to read pet images from the assets bucket',
        )
        assets_bucket.grant_read(self.assets_role)

        assets_resource = self.api.root.add_resource('assets')
        folder_resource = assets_resource.add_resource('{folder}')
        object_resource = folder_resource.add_resource('{key}')

        # GET /assets/{folder}/{key} → s3://<bucket>/{folder}/{key}
        object_resource.add_method(
            'GET',
            apigw.AwsIntegration(
                service='s3',
                integration_http_method='GET',
                path=f'{assets_bucket.bucket_name}/{{folder}}/{{key}}',
                options=apigw.IntegrationOptions(
                    credentials_role=self.assets_role,
                    request_parameters={
                        'integration.request.path.folder': 'method.request.path.folder',
                        'integration.request.path.key': 'method.request.path.key',
                    },
                    integration_responses=[
                        apigw.IntegrationResponse(
                            status_code='200',
                            response_parameters={
                                'method.response.header.Content-Type': 'integration.response.header.Content-Type',
                                'method.response.header.Content-Length': 'integration.response.header.Content-Length',
                                'method.response.header.Access-Control-Allow-Origin': "'*'",
                            },
                        ),
                        # S3 は存在しないキーに 403 を返すことがあるため 4xx をまとめて 404 にする
                        apigw.IntegrationResponse(
                            status_code='404',
                            selection_pattern=r'4\d{2}',
                        ),
                        apigw.IntegrationResponse(
                            status_code='500',
                            selection_pattern=r'5\d{2}',
                        ),
                    ],
                ),
            ),
            request_parameters={
                'method.request.path.folder': True,
                'method.request.path.key': True,
            },
            method_responses=[
                apigw.MethodResponse(
                    status_code='200',
                    response_parameters={
                        'method.response.header.Content-Type': True,
                        'method.response.header.Content-Length': True,
                        'method.response.header.Access-Control-Allow-Origin': True,
                    },
                ),
                apigw.MethodResponse(status_code='404'),
                apigw.MethodResponse(status_code='500'),
            ],
        )

        # =================================================================
        # Pets Endpoint
        # =================================================================

        pets_resource = self.api.root.add_resource('pets')

        # POST /pets - Create pet
        pets_resource.add_method(
            'POST',
            apigw.LambdaIntegration(create_pet_fn),
        )

        # =================================================================
        # Outputs
        # =================================================================

        self.api_url = self.api.url
