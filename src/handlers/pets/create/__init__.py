"""Create Pet Lambda Handler"""
