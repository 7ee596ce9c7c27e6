# tests for auth service and the bearer token dependency
# unit tests for journal_app/services/auth_service.py

from datetime import timedelta

from jose import jwt

from journal_app.config import settings
from journal_app.services.auth_service import create_access_token, decode_token
from tests.conftest import USER_ID


class TestJWTTokens:
    """jwt token creation and validation"""

    def test_create_access_token(self):
        token = create_access_token({"sub": "user123"})
        assert isinstance(token, str)
        assert len(token) > 0

    def test_decode_access_token(self):
        token = create_access_token({"sub": "user123"})
        payload = decode_token(token)
        assert payload is not None
        assert payload["sub"] == "user123"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_decode_invalid_token(self):
        assert decode_token("invalid.token.here") is None

    def test_decode_empty_token(self):
        assert decode_token("") is None

    def test_expired_token(self):
        token = create_access_token({"sub": "user1"}, expires_delta=timedelta(minutes=-5))
        assert decode_token(token) is None


class TestCurrentUser:
    """bearer token resolution on a protected route"""

    async def test_valid_token(self, client):
        token = create_access_token({"sub": USER_ID})
        resp = await client.get("/stats", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200

    async def test_invalid_token(self, client):
        resp = await client.get("/stats", headers={"Authorization": "Bearer not-a-token"})
        assert resp.status_code == 401

    async def test_wrong_token_type(self, client):
        token = jwt.encode(
            {"sub": USER_ID, "type": "refresh"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM
        )
        resp = await client.get("/stats", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_missing_subject(self, client):
        token = create_access_token({"role": "user"})
        resp = await client.get("/stats", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
