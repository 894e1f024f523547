"""
Tests for the format pre-filter checks.
"""

import re

import pytest

from credential_mod.validation import (
    all_of,
    is_correct_email,
    is_correct_password,
    is_correct_phone,
    is_length,
    pattern,
)


class TestIsLength:
    def test_bounds(self):
        assert is_length("Hello", min_length=3, max_length=10)
        assert not is_length("Hello", min_length=6)
        assert not is_length("Hello", max_length=4)
        assert is_length("Hello")

    def test_empty_is_never_valid(self):
        assert not is_length("")
        assert not is_length("", min_length=0)


class TestPassword:
    @pytest.mark.parametrize("text", ["Passw0rd", "CorrectHorse1", "aB3aB3aB3aB3aB3"])
    def test_default_accepts(self, text):
        assert is_correct_password(text)

    @pytest.mark.parametrize("text", ["password1", "PASSWORD1", "Password", "Pa1", "aB3aB3aB3aB3aB3x"])
    def test_default_rejects(self, text):
        assert not is_correct_password(text)

    def test_custom_regex(self):
        assert is_correct_password("Passw0rd", pattern(re.compile(r"^[a-zA-Z0-9]{6,12}$")))
        assert not is_correct_password("Pass", pattern(r"^[a-zA-Z0-9]{6,12}$"))

    def test_custom_predicate(self):
        assert is_correct_password("anything at all", lambda s: " " in s)

    def test_all_of(self):
        check = all_of(pattern(r"\d"), lambda s: is_length(s, min_length=12))
        assert is_correct_password("longpassword1", check)
        assert not is_correct_password("short1", check)
        assert not is_correct_password("longpassword", check)


class TestEmailAndPhone:
    def test_email(self):
        assert is_correct_email("example@example.com")
        assert not is_correct_email("example@example")
        assert not is_correct_email("no-at-sign.com")
        assert is_correct_email("x@y", lambda s: "@" in s)

    @pytest.mark.parametrize("text", ["+7 123 456-78-90", "8 (123) 4567890", "4567890"])
    def test_phone_accepts(self, text):
        assert is_correct_phone(text)

    @pytest.mark.parametrize("text", ["", "12345", "+7 phone"])
    def test_phone_rejects(self, text):
        assert not is_correct_phone(text)

    def test_phone_custom(self):
        check = pattern(r"^\+7\d{10}$")
        assert is_correct_phone("+71234567890", check)
        assert not is_correct_phone("+7 123 456-78-90", check)
