"""
Lambda Handlers for Mrau Pets

サーバレス構成のエントリポイント:
- Create Pet (API Gateway POST /pets → S3 + DynamoDB)
"""
