"""
Snipnet Backend — Validation and Authentication Unit Tests
============================================================

What:  Tests for the body validators and bearer token handling.
"""

import pytest
from datetime import timedelta

from jose import jwt

from snipnet.auth import create_access_token, decode_session
from snipnet.config import settings
from snipnet.exceptions import UnauthenticatedError, UnauthorizedError
from snipnet.validation import describe, validate_snippet, validate_update_one


class TestValidateSnippet:

    def test_valid_body_has_no_violations(self):
        assert validate_snippet({"title": "t", "description": "d", "code": "c"}) == []

    def test_extra_keys_are_ignored(self):
        body = {"title": "t", "description": "d", "code": "c", "id": "x", "user_id": "y"}
        assert validate_snippet(body) == []

    def test_each_missing_field_is_reported(self):
        violations = validate_snippet({})
        assert [v.field for v in violations] == ["title", "description", "code"]

    def test_wrong_type_is_reported(self):
        violations = validate_snippet({"title": 5, "description": "d", "code": "c"})
        assert [v.field for v in violations] == ["title"]

    def test_non_object_body(self):
        violations = validate_snippet("just a string")
        assert violations[0].field == "body"

    def test_title_longer_than_column_is_reported(self):
        violations = validate_snippet({"title": "x" * 256, "description": "d", "code": "c"})
        assert [v.field for v in violations] == ["title"]

    def test_title_at_column_width_is_valid(self):
        assert validate_snippet({"title": "x" * 255, "description": "d", "code": "c"}) == []

    def test_describe_joins_violations(self):
        text = describe(validate_snippet({"title": "t", "description": "d"}))
        assert text.startswith("code: ")


class TestValidateUpdateOne:

    def test_valid(self):
        assert validate_update_one({"field": "title", "value": "x"}) == []

    def test_field_name_is_not_checked_here(self):
        # The allow-list is enforced by the controller after the ownership check
        assert validate_update_one({"field": "user_id", "value": "x"}) == []

    def test_long_title_value_is_reported(self):
        violations = validate_update_one({"field": "title", "value": "x" * 300})
        assert [v.field for v in violations] == ["value"]

    def test_long_code_value_is_valid(self):
        assert validate_update_one({"field": "code", "value": "x" * 300}) == []

    def test_missing_value(self):
        assert [v.field for v in validate_update_one({"field": "title"})] == ["value"]


class TestTokens:

    def test_round_trip(self):
        session = decode_session(create_access_token("u1"))
        assert session.user_id == "u1"

    def test_wrong_secret_rejected(self):
        token = jwt.encode({"sub": "u1"}, "some-other-secret", algorithm=settings.jwt_algorithm)
        with pytest.raises(UnauthorizedError):
            decode_session(token)

    def test_expired_rejected(self):
        token = create_access_token("u1", expires_delta=timedelta(seconds=-1))
        with pytest.raises(UnauthorizedError, match="Unauthenticated"):
            decode_session(token)

    def test_missing_sub_rejected(self):
        token = jwt.encode({"name": "u1"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with pytest.raises(UnauthorizedError) as exc_info:
            decode_session(token)
        assert exc_info.value.detail == "Token missing 'sub'"

    def test_overlong_sub_rejected(self):
        with pytest.raises(UnauthenticatedError) as exc_info:
            decode_session(create_access_token("u" * 256))
        assert exc_info.value.detail == "Token 'sub' is too long"

    def test_sub_at_column_width_accepted(self):
        assert decode_session(create_access_token("u" * 255)).user_id == "u" * 255
