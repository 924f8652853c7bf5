"""
Auth Service - credential verification, token issuance and user lookup
"""
