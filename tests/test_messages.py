"""Tests for the message resolver."""

import pytest

from formguard.core.result import FailureCode
from formguard.messages.resolver import (
    DEFAULT_MESSAGES,
    MessageResolver,
    errors_for,
    resolve,
)
from tests.conftest import StubNode


class TestResolve:

    def test_password_length_template(self):
        assert resolve("passwordLength", {"requiredLength": 8}) == (
            "Password must be at least 8 characters long"
        )

    def test_accepts_enum_codes(self):
        assert resolve(FailureCode.MINIMUM_AGE, {"requiredAge": 18, "actualAge": 16}) == (
            "Minimum age required is 18."
        )

    def test_image_dimensions_template(self):
        message = resolve("imageDimensionsExceeded", {"requiredWidth": 100, "requiredHeight": 80})

        assert "max width 100" in message
        assert "max height 80" in message

    def test_flag_payload_is_ignored(self):
        assert resolve("passwordMismatch", True).startswith("Passwords do not match.")

    def test_missing_params_render_empty(self):
        assert resolve("fileSizeExceeded") == "File size exceeded, maximum size allowed is "

    @pytest.mark.parametrize("code", ["unknownCode", "", "PASSWORDLENGTH"])
    def test_unknown_code_is_none(self, code):
        assert resolve(code, {}) is None

    def test_every_code_has_a_message(self):
        assert set(DEFAULT_MESSAGES) == set(FailureCode)
        for code in FailureCode:
            assert resolve(code, {}) is not None


class TestErrorsFor:

    def test_none_field(self):
        assert errors_for(None) is None

    def test_no_errors(self):
        assert errors_for(StubNode("x", touched=True)) is None
        assert errors_for(StubNode("x", touched=True, errors={})) is None

    def test_untouched_field_is_suppressed(self):
        field = StubNode("x", touched=False, errors={"required": True})

        assert errors_for(field) == []

    def test_touched_field_shows_every_error_in_order(self):
        field = StubNode("x", touched=True, errors={
            "passwordLength": {"requiredLength": 10},
            "whitespace": True,
            "required": True,
        })

        assert errors_for(field) == [
            "Password must be at least 10 characters long",
            "Field cannot start or end with whitespace.",
            "This field is required",
        ]

    def test_unknown_codes_are_skipped(self):
        field = StubNode("x", touched=True, errors={"futureCode": True, "invalidUrl": True})

        assert errors_for(field) == ["Invalid URL."]


class TestMessageResolver:

    def test_override_template(self):
        resolver = MessageResolver().override("invalidDomain", "Use your work email.")

        assert resolver.resolve(FailureCode.INVALID_DOMAIN) == "Use your work email."

    def test_constructor_templates(self):
        resolver = MessageResolver({FailureCode.MIN: "At least {requiredMin}"})

        assert resolver.resolve("min", {"requiredMin": 3, "actual": 1}) == "At least 3"

    def test_custom_codes(self):
        resolver = MessageResolver({"futureCode": "Coming soon"})
        field = StubNode("x", touched=True, errors={"futureCode": True})

        assert resolver.errors_for(field) == ["Coming soon"]

    @pytest.mark.parametrize("template", ["Item {0}", "Hi {user.name}", "Row {row[0]}", "Broken {"])
    def test_unformattable_template_resolves_to_none(self, template):
        resolver = MessageResolver().override("invalidDomain", template)

        assert resolver.resolve("invalidDomain", {"user": "ada"}) is None

    def test_unformattable_template_is_skipped_for_fields(self):
        resolver = MessageResolver({"invalidDomain": "{0}"})
        field = StubNode("x", touched=True, errors={"invalidDomain": True, "required": True})

        assert resolver.errors_for(field) == ["This field is required"]

    def test_overrides_do_not_leak_into_default(self):
        MessageResolver().override("invalidISBN", "changed")

        assert resolve("invalidISBN") == "Invalid ISBN."
