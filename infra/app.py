#!/usr/bin/env python3
"""
CDK Application Entry Point

Mrau - 里親募集サイトのサーバレス基盤 (S3 + API Gateway + Lambda + DynamoDB) をデプロイ。
"""
import os
import aws_cdk as cdk

from infra.stacks.mrau_stack import MrauStack

app = cdk.App()

# 環境設定
env = cdk.Environment(
    account=os.environ.get('CDK_DEFAULT_ACCOUNT'),
    region=os.environ.get('CDK_DEFAULT_REGION', 'eu-central-1'),
)

MrauStack(
    app,
    'MrauStack',
    env=env,
    description='Mrau - pet adoption assets and create-pet API',
)

app.synth()
