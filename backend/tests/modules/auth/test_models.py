"""Tests for auth module models."""

import pytest
from datetime import date

from modules.auth.models import JWTPayload, RegisterRequest, UserProfile, UserRecord


class TestRegisterRequest:
    def test_accepts_camel_case(self):
        request = RegisterRequest.model_validate({
            "email": "trinity@example.com",
            "password": "there-is-no-spoon",
            "dateOfBirth": "1990-05-05",
            "firstName": "Trinity",
        })
        assert request.date_of_birth == date(1990, 5, 5)
        assert request.first_name == "Trinity"
        assert request.last_name is None

    def test_short_password(self):
        with pytest.raises(ValueError):
            RegisterRequest(email="a@example.com", password="short", date_of_birth=date(1990, 1, 1))

    def test_invalid_email(self):
        with pytest.raises(ValueError):
            RegisterRequest(email="not-an-email", password="long-enough", date_of_birth=date(1990, 1, 1))

    def test_requires_date_of_birth(self):
        with pytest.raises(ValueError):
            RegisterRequest.model_validate({"email": "a@example.com", "password": "long-enough"})


class TestUserProfile:
    def test_from_record_drops_password(self):
        record = UserRecord(id="u1", email="a@example.com", password_hash="$2b$hash")

        profile = UserProfile.from_record(record)

        assert profile.id == "u1"
        assert "password_hash" not in profile.model_dump()


class TestJWTPayload:
    def test_reads_camel_case_claims(self):
        payload = JWTPayload(**{
            "sub": "u1",
            "email": "a@example.com",
            "exp": 2,
            "iat": 1,
            "dateOfBirth": "2000-01-01",
            "role": "ignored",
        })
        assert payload.date_of_birth == date(2000, 1, 1)
        assert payload.aud == "authenticated"
