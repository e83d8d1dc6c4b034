"""Pet Lambda Handlers"""
