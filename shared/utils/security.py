"""
Security utilities for the project tracker

Provides password hashing and identity token issuance/verification.
"""

import logging
from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_EXPIRES_HOURS = 24


class SecurityUtils:
    """Security utilities class"""

    def __init__(
        self,
        jwt_secret: str,
        jwt_algorithm: str = "HS256",
        token_expires_hours: int = DEFAULT_TOKEN_EXPIRES_HOURS
    ):
        if not jwt_secret:
            raise ValueError("JWT secret must be set to issue identity tokens")
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm
        self.token_expires_hours = token_expires_hours

    def hash_password(self, password: str) -> str:
        """
        Hash password using bcrypt

        Args:
            password: Plain text password

        Returns:
            Hashed password
        """
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def verify_password(self, password: str, hashed_password: str) -> bool:
        """
        Verify password against hash

        Args:
            password: Plain text password
            hashed_password: Hashed password

        Returns:
            True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))
        except ValueError as e:
            logger.error(f"Failed to verify password: {e}")
            return False

    def generate_token(self, payload: Dict[str, Any], expires_in: Optional[timedelta] = None) -> str:
        """
        Generate a signed identity token

        Args:
            payload: Token claims
            expires_in: Lifetime, defaults to the configured fixed lifetime

        Returns:
            JWT token string
        """
        if expires_in is None:
            expires_in = timedelta(hours=self.token_expires_hours)

        now = datetime.now(timezone.utc)
        payload_copy = payload.copy()
        payload_copy["iat"] = now
        payload_copy["exp"] = now + expires_in

        return jwt.encode(payload_copy, self.jwt_secret, algorithm=self.jwt_algorithm)

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode a token

        Args:
            token: JWT token string

        Returns:
            Decoded payload or None if invalid or expired
        """
        try:
            return jwt.decode(token, self.jwt_secret, algorithms=[self.jwt_algorithm])
        except jwt.ExpiredSignatureError:
            logger.warning("Token has expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            return None
