"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
The environment is fixed here, before any test module imports the app, so
settings never pick up a developer's real Supabase or Stripe credentials.
"""

import os

# Test secrets (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_WEBHOOK_SECRET = "whsec_test_secret"

os.environ.update(
    {
        "SUPABASE_URL": "",
        "SUPABASE_SERVICE_ROLE_KEY": "",
        "SUPABASE_JWT_SECRET": TEST_JWT_SECRET,
        "STRIPE_SECRET_KEY": "",
        "STRIPE_WEBHOOK_SECRET": TEST_WEBHOOK_SECRET,
        "RATE_LIMIT_ENABLED": "true",
    }
)

import hashlib
import hmac
import time
from datetime import datetime, timezone, timedelta
from typing import Optional

import jwt  # PyJWT
import pytest

from api.dependencies import reset_container
from modules.auth.service import reset_auth_service
from shared.config import get_settings
from shared.database import reset_client_cache


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def sign_webhook_payload(
    payload: bytes,
    secret: str = TEST_WEBHOOK_SECRET,
    timestamp: Optional[int] = None,
) -> str:
    """Build a Stripe-Signature header value for ``payload``."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.".encode() + payload
    signature = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and services around each test."""
    get_settings.cache_clear()
    reset_auth_service()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_auth_service()
    reset_client_cache()
    reset_container()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
