"""
Unit tests for schemas.user validation.
Tests request models through validate_payload and the error envelope helpers.
"""
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.error_handlers import register_error_handlers
from app.core.errors import EmailTaken, Internal, NotFound, SelfFollowRejected, WeakPassword
from app.schemas.user import (
    LoginIn,
    PasswordUpdateIn,
    ProfileUpdateIn,
    RegisterIn,
    field_errors,
    validate_payload,
)


def _register_payload(**overrides):
    payload = {
        "username": "alice_01",
        "fullName": "Alice Liddell",
        "email": "Alice@Example.com",
        "password": "Wonder#land1",
        "confirmPassword": "Wonder#land1",
    }
    payload.update(overrides)
    return payload


class TestRegisterValidation:
    def test_valid_payload_normalizes_email(self):
        result = validate_payload(RegisterIn, _register_payload())
        assert result.success is True
        assert result.errors == []
        assert result.data.email == "alice@example.com"

    def test_username_strips_whitespace(self):
        result = validate_payload(RegisterIn, _register_payload(username="  alice_01  "))
        assert result.success is True
        assert result.data.username == "alice_01"

    def test_username_rejects_symbols(self):
        result = validate_payload(RegisterIn, _register_payload(username="alice-01"))
        assert result.success is False
        assert result.errors == [
            {"field": "username", "message": "Username can only contain letters, numbers, and underscores"}
        ]

    def test_username_too_long(self):
        result = validate_payload(RegisterIn, _register_payload(username="a" * 31))
        assert result.success is False
        assert result.errors[0]["field"] == "username"

    def test_invalid_email(self):
        result = validate_payload(RegisterIn, _register_payload(email="not-an-email"))
        assert result.success is False
        assert [e["field"] for e in result.errors] == ["email"]

    def test_password_confirmation_mismatch(self):
        result = validate_payload(RegisterIn, _register_payload(confirmPassword="Different#1"))
        assert result.success is False
        assert result.errors == [{"field": "", "message": "Passwords don't match"}]

    def test_short_password(self):
        result = validate_payload(RegisterIn, _register_payload(password="Ab1!", confirmPassword="Ab1!"))
        assert result.success is False
        assert result.errors[0]["field"] == "password"

    def test_missing_fields_reported_per_field(self):
        result = validate_payload(RegisterIn, {})
        assert result.success is False
        fields = {e["field"] for e in result.errors}
        assert fields == {"username", "fullName", "email", "password", "confirmPassword"}


class TestOtherSchemas:
    def test_login_lowercases_email(self):
        result = validate_payload(LoginIn, {"email": "BOB@EXAMPLE.COM", "password": "x"})
        assert result.success is True
        assert result.data.email == "bob@example.com"

    def test_profile_update_all_optional(self):
        result = validate_payload(ProfileUpdateIn, {})
        assert result.success is True
        assert result.data.username is None

    def test_profile_update_bio_limit(self):
        result = validate_payload(ProfileUpdateIn, {"bio": "x" * 501})
        assert result.success is False
        assert result.errors[0]["field"] == "bio"

    def test_profile_update_link(self):
        assert validate_payload(ProfileUpdateIn, {"link": ""}).success is True
        assert validate_payload(ProfileUpdateIn, {"link": "https://example.com/me"}).success is True
        bad = validate_payload(ProfileUpdateIn, {"link": "not a url"})
        assert bad.success is False
        assert bad.errors == [{"field": "link", "message": "Invalid URL format"}]

    def test_password_update_confirmation(self):
        result = validate_payload(
            PasswordUpdateIn,
            {"currentPassword": "Old#Pass1", "newPassword": "New#Pass12", "confirmNewPassword": "New#Pass13"},
        )
        assert result.success is False
        assert result.errors[0]["message"] == "New passwords don't match"


class TestErrorHelpers:
    def test_field_errors_drops_request_location(self):
        errors = [{"loc": ("body", "username"), "msg": "Value error, Username is required", "type": "value_error"}]
        assert field_errors(errors) == [{"field": "username", "message": "Username is required"}]

    def test_app_error_envelope(self):
        assert EmailTaken().to_dict() == {
            "success": False,
            "error": {"code": "EMAIL_EXISTS", "message": "Email already registered", "field": "email"},
        }
        assert NotFound().status_code == 404
        assert SelfFollowRejected().status_code == 409

    def test_app_error_overrides(self):
        err = WeakPassword(field="newPassword")
        assert err.code == "WEAK_PASSWORD"
        assert err.status_code == 400
        assert err.to_dict()["error"]["field"] == "newPassword"


@pytest.mark.asyncio
class TestUnhandledErrors:
    async def test_unexpected_exception_returns_internal_envelope(self):
        app = FastAPI()
        register_error_handlers(app)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("database exploded")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/boom")

        assert resp.status_code == 500
        assert resp.json() == Internal().to_dict()
        assert "exploded" not in resp.text
