"""
Project Service - project lifecycle and membership
"""
