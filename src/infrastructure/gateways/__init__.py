"""Infrastructure Gateways"""
from .s3 import S3Gateway

__all__ = ["S3Gateway"]
