"""Tests for password strength and password match rules."""

import pytest

from formguard.core.exceptions import RuleDefinitionError
from formguard.core.result import VALID, FailureCode
from formguard.validation.password import (
    password_match,
    password_match_group,
    password_strength,
    strong_password,
)
from tests.conftest import StubNode


class TestPasswordStrength:
    """Ordered checks: length, case, digit, special."""

    def test_valid_password(self):
        assert password_strength(8)("StrongPassword1!") == VALID

    @pytest.mark.parametrize("password", ["Short1!", "a", "", "abcdefg"])
    def test_short_password_reports_length_first(self, password):
        result = password_strength(8)(password)

        assert result.code == FailureCode.PASSWORD_LENGTH
        assert result.params == {"requiredLength": 8}

    @pytest.mark.parametrize("min_length", [1, 4, 12, 20])
    def test_length_param_follows_configuration(self, min_length):
        result = password_strength(min_length)("x" * (min_length - 1))

        assert result.params == {"requiredLength": min_length}

    def test_missing_uppercase(self):
        assert password_strength(8)("weakpassword1!").code == FailureCode.PASSWORD_CASE

    def test_missing_lowercase(self):
        assert password_strength(8)("WEAKPASSWORD1!").code == FailureCode.PASSWORD_CASE

    def test_missing_digit(self):
        assert password_strength(8)("WeakPassword!").code == FailureCode.PASSWORD_DIGIT

    def test_missing_special_character(self):
        assert password_strength(8)("WeakPassword1").code == FailureCode.PASSWORD_SPECIAL

    def test_case_reported_before_digit_and_special(self):
        assert password_strength(4)("lowercaseonly").code == FailureCode.PASSWORD_CASE

    def test_none_value_counts_as_empty(self):
        assert password_strength(1)(None).code == FailureCode.PASSWORD_LENGTH

    def test_default_length_comes_from_settings(self):
        assert password_strength().min_length == 8

    def test_negative_length_is_rejected(self):
        with pytest.raises(RuleDefinitionError):
            password_strength(-1)


class TestStrongPassword:

    def test_strong_password(self):
        assert strong_password()("strongPassword123$") == VALID

    def test_weak_password(self):
        result = strong_password()("weakpassword")

        assert result.code == FailureCode.STRONG_PASSWORD
        assert result.params is None
        assert result.to_errors() == {"strongPassword": True}

    def test_none_is_weak(self):
        assert strong_password()(None).code == FailureCode.STRONG_PASSWORD


class TestPasswordMatch:

    def test_matching_passwords(self, stub_tree):
        tree = stub_tree(password="password123", confirmPassword="password123")

        assert password_match()(tree.get("confirmPassword")) == VALID

    def test_mismatched_passwords(self, stub_tree):
        tree = stub_tree(password="password123", confirmPassword="password456")

        result = password_match()(tree.get("confirmPassword"))
        assert result.code == FailureCode.PASSWORD_MISMATCH

    @pytest.mark.parametrize("value", ["", "same", "P@ss w0rd"])
    def test_identical_values_are_valid(self, stub_tree, value):
        tree = stub_tree(password=value, confirmPassword=value)

        assert password_match()(tree.get("confirmPassword")) == VALID

    def test_lookup_goes_through_root(self):
        inner = StubNode(children={"confirmPassword": StubNode("abc")})
        root = StubNode(children={"password": StubNode("abc"), "credentials": inner})

        assert password_match()(root.get("credentials").get("confirmPassword")) == VALID

    def test_custom_sibling_name(self, stub_tree):
        tree = stub_tree(secret="abc", again="abd")

        result = password_match("secret")(tree.get("again"))
        assert result.code == FailureCode.PASSWORD_MISMATCH


class TestPasswordMatchGroup:

    def test_group_with_equal_values(self, stub_tree):
        assert password_match_group()(stub_tree(password="a", confirmPassword="a")) == VALID

    def test_group_with_different_values(self, stub_tree):
        result = password_match_group()(stub_tree(password="password", confirmPassword="password2"))

        assert result.code == FailureCode.PASSWORD_MISMATCH

    def test_missing_confirmation_field_is_valid(self, stub_tree):
        assert password_match_group()(stub_tree(password="a")) == VALID
