"""Unit tests for authentication schemas."""

import pytest
from pydantic import ValidationError

from src.notekeeper.core.models.types import Role
from src.notekeeper.core.schemas.auth import (
    AccessTokenResponse,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
)


def _register(**overrides):
    data = {"name": "Ada", "email": "ada@example.com", "password": "longenough"}
    data.update(overrides)
    return RegisterRequest(**data)


class TestRegisterRequest:
    def test_role_defaults_to_user(self):
        assert _register().role == Role.USER
        assert _register(role=None).role == Role.USER

    def test_role_upper_cased(self):
        assert _register(role="admin").role == Role.ADMIN
        assert _register(role="User").role == Role.USER

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            _register(role="superuser")

    def test_email_kept_exactly(self):
        assert _register(email="Ada@Example.com").email == "Ada@Example.com"

    @pytest.mark.parametrize("email", ["plainaddress", "a@b", "a b@example.com", "@example.com"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValidationError):
            _register(email=email)

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            _register(password="short")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            _register(name="   ")

    def test_name_stripped(self):
        assert _register(name="  Ada  ").name == "Ada"


class TestWireNames:
    def test_register_response_uses_camel_case(self):
        response = RegisterResponse(user_id=1, token="a", refresh_token="r")
        assert response.model_dump(by_alias=True) == {
            "message": "User registered successfully",
            "userId": 1,
            "token": "a",
            "refreshToken": "r",
        }

    def test_refresh_request_accepts_camel_case(self):
        assert RefreshTokenRequest.model_validate({"refreshToken": "abc"}).refresh_token == "abc"

    def test_refresh_request_token_optional(self):
        assert RefreshTokenRequest.model_validate({}).refresh_token is None

    def test_access_token_response(self):
        assert AccessTokenResponse(access_token="t").model_dump(by_alias=True) == {
            "accessToken": "t"
        }
