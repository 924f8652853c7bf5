"""
Task Service - task lifecycle with cross-service project validation
"""
