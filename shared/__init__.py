"""
Shared library for the project tracker services
"""
