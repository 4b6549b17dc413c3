"""Tests for credential format rules and input sanitization."""

import pytest

from mydiary.core.credentials import (
    CredentialCheck,
    is_valid_email,
    is_valid_password,
    is_valid_username,
    sanitize_input,
    validate_login_input,
    validate_registration_input,
)


class TestUsernameFormat:
    """Usernames are 4-8 ASCII letters or digits."""

    @pytest.mark.parametrize("username", ["user", "user1", "ABCD1234", "a1b2"])
    def test_accepts_alphanumeric_within_length(self, username):
        assert is_valid_username(username) is True

    @pytest.mark.parametrize(
        "username",
        ["abc", "abcdefghi", "user_1", "us er", "usér1", ""],
    )
    def test_rejects_bad_usernames(self, username):
        assert is_valid_username(username) is False


class TestPasswordFormat:
    """Passwords need upper, lower, digit and one of !@#$%^&* in 4-8 chars."""

    @pytest.mark.parametrize("password", ["Abcd1!", "aB3$", "Zz9&Zz9&"])
    def test_accepts_passwords_with_all_classes(self, password):
        assert is_valid_password(password) is True

    @pytest.mark.parametrize(
        "password",
        [
            "abcd1!",  # no uppercase
            "ABCD1!",  # no lowercase
            "Abcde!",  # no digit
            "Abcd12",  # no symbol
            "Abcd1!xyz",
            "Ab1",
            "Abc 1!",
            "Abc1!?",  # ? is not an allowed symbol
        ],
    )
    def test_rejects_passwords_breaking_a_rule(self, password):
        assert is_valid_password(password) is False

    def test_minimum_length_with_all_classes(self):
        assert is_valid_password("Ab1!") is True


class TestEmailFormat:
    """Emails need a local part, an @, and a dotted domain."""

    @pytest.mark.parametrize("email", ["a@b.com", "first.last@example.co.uk"])
    def test_accepts_plausible_emails(self, email):
        assert is_valid_email(email) is True

    @pytest.mark.parametrize(
        "email", ["plainaddress", "a@b", "@b.com", "a b@c.com", "a@b@c.com"]
    )
    def test_rejects_malformed_emails(self, email):
        assert is_valid_email(email) is False


class TestValidateLoginInput:
    """validate_login_input() reports the first failing rule."""

    def test_valid_input(self):
        assert validate_login_input("user1", "Abcd1!") is CredentialCheck.OK

    @pytest.mark.parametrize(
        ("username", "password"), [(None, "Abcd1!"), ("user1", ""), ("", None)]
    )
    def test_empty_fields_checked_first(self, username, password):
        assert validate_login_input(username, password) is CredentialCheck.EMPTY_FIELDS

    def test_username_checked_before_password(self):
        assert validate_login_input("u", "bad") is CredentialCheck.BAD_USERNAME

    def test_bad_password(self):
        assert validate_login_input("user1", "abcd") is CredentialCheck.BAD_PASSWORD


class TestValidateRegistrationInput:
    """validate_registration_input() adds the email rule after the others."""

    def test_valid_input(self):
        result = validate_registration_input("user1", "Abcd1!", "a@b.com")
        assert result is CredentialCheck.OK

    def test_empty_email_is_empty_fields(self):
        result = validate_registration_input("user1", "Abcd1!", "")
        assert result is CredentialCheck.EMPTY_FIELDS

    def test_empty_check_wins_over_format(self):
        result = validate_registration_input("u", "bad", None)
        assert result is CredentialCheck.EMPTY_FIELDS

    def test_bad_email_reported_last(self):
        result = validate_registration_input("user1", "Abcd1!", "not-an-email")
        assert result is CredentialCheck.BAD_EMAIL

    def test_bad_password_before_bad_email(self):
        result = validate_registration_input("user1", "abcd", "not-an-email")
        assert result is CredentialCheck.BAD_PASSWORD


class TestSanitizeInput:
    """sanitize_input() HTML-escapes markup."""

    def test_escapes_markup(self):
        assert sanitize_input("<b>&") == "&lt;b&gt;&amp;"

    def test_plain_text_unchanged(self):
        assert sanitize_input("user1") == "user1"

    def test_none_passes_through(self):
        assert sanitize_input(None) is None
