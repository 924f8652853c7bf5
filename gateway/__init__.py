"""
API Gateway - the single public HTTP entry point
"""
