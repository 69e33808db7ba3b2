"""User Validation — tests for the three field rules and their order.

Tests cover:
    - Each rule accepts its boundary values and rejects just past them
    - validate() short-circuits: email before username before full_name
    - validate() returns None iff all three rules hold
    - The validator is pure (same input, same result, no state change)
"""

import pytest

from cruder.core.domain_types import UserRecord
from cruder.core.errors import (
    InvalidEmailError,
    InvalidFullNameError,
    InvalidUsernameError,
)
from cruder.core.validate_user import UserValidator, get_user_validator


VALID = UserRecord(username="john_doe", email="john@doe.ee", full_name="John Doe")


@pytest.fixture
def validator() -> UserValidator:
    return UserValidator()


# ─── email ───────────────────────────────────────────────────────

@pytest.mark.parametrize("email", [
    "john@doe.ee",
    "a@b.co",
    "john.doe-x@mail.example.com",
    "j_d@sub-domain.example.info",
    "-.-@x-y.z_1",
])
def test_email_accepts_simplified_grammar(validator, email):
    assert validator.check_email(email) is None


@pytest.mark.parametrize("email", [
    "",
    "john",
    "john@doe",
    "john@doe.e",
    "john@doe.abcde",
    "john@@doe.ee",
    "john+tag@doe.ee",
    "@doe.ee",
    "john@.ee",
    "jöhn@doe.ee",
    "john@doe.ee\n",
    " john@doe.ee",
])
def test_email_rejects_outside_grammar(validator, email):
    assert isinstance(validator.check_email(email), InvalidEmailError)


# ─── username ────────────────────────────────────────────────────

@pytest.mark.parametrize("username", [
    "abc",
    "john_doe",
    "j0hn",
    "a" + "b" * 49,
])
def test_username_accepts_lowercase_3_to_50(validator, username):
    assert validator.check_username(username) is None


@pytest.mark.parametrize("username", [
    "jo",
    "a" + "b" * 50,
    "John_doe",
    "1john",
    "_john",
    "john-doe",
    "john doe",
    "",
])
def test_username_rejects_invalid(validator, username):
    assert isinstance(validator.check_username(username), InvalidUsernameError)


# ─── full_name ───────────────────────────────────────────────────

@pytest.mark.parametrize("full_name", [
    "Jo",
    "John Doe",
    "Mary-Jane O'Neil",
    "A" + "b" * 98 + "C",
])
def test_full_name_accepts_letters_spaces_apostrophes_hyphens(validator, full_name):
    assert validator.check_full_name(full_name) is None


@pytest.mark.parametrize("full_name", [
    "J",
    "A" + "b" * 99 + "C",
    "John Doe-",
    " John Doe",
    "John Doe 3rd",
    "José Doe",
    "",
])
def test_full_name_rejects_invalid(validator, full_name):
    assert isinstance(validator.check_full_name(full_name), InvalidFullNameError)


# ─── validate ────────────────────────────────────────────────────

def test_validate_returns_none_for_valid_user(validator):
    assert validator.validate(VALID) is None


def test_invalid_email_wins_over_invalid_username(validator):
    user = UserRecord(username="jo", email="not-an-email", full_name="John Doe")
    assert isinstance(validator.validate(user), InvalidEmailError)


def test_invalid_email_wins_over_everything(validator):
    user = UserRecord(username="JO", email="bad", full_name="1")
    assert isinstance(validator.validate(user), InvalidEmailError)


def test_invalid_username_wins_over_invalid_full_name(validator):
    user = UserRecord(username="jo", email="john@doe.ee", full_name="X")
    assert isinstance(validator.validate(user), InvalidUsernameError)


def test_invalid_full_name_reported_last(validator):
    user = UserRecord(username="john_doe", email="john@doe.ee", full_name="X")
    assert isinstance(validator.validate(user), InvalidFullNameError)


@pytest.mark.parametrize("email_ok", [True, False])
@pytest.mark.parametrize("username_ok", [True, False])
@pytest.mark.parametrize("full_name_ok", [True, False])
def test_validity_is_conjunction_of_three_rules(
    validator, email_ok, username_ok, full_name_ok,
):
    user = UserRecord(
        email="john@doe.ee" if email_ok else "john@doe",
        username="john_doe" if username_ok else "jo",
        full_name="John Doe" if full_name_ok else "J",
    )
    error = validator.validate(user)
    assert (error is None) == (email_ok and username_ok and full_name_ok)


def test_validate_ignores_id(validator):
    assert validator.validate(VALID.with_id(42)) is None


def test_validate_is_repeatable(validator):
    user = UserRecord(username="jo", email="john@doe.ee", full_name="John Doe")
    first = validator.validate(user)
    second = validator.validate(user)
    assert type(first) is type(second) is InvalidUsernameError


def test_get_user_validator_is_cached():
    assert get_user_validator() is get_user_validator()
