from datetime import timedelta

import pytest
from jose import jwt

from entropy.errors import AuthError, ConflictError, ValidationError
from entropy.services.auth_service import AuthService
from entropy.utils.security import create_access_token

from conftest import SECRET


def test_register_returns_user_and_token_bound_to_it(auth):
    user, token = auth.register("Ana", "ana@x.com", 15, "secret1")
    assert user.id == 1
    assert user.enrolled_module_ids == []
    assert user.completed_module_ids == []
    assert user.progress == {}
    assert user.password_hash != "secret1"
    assert auth.verify_credential(token) == user.id


def test_distinct_registrations_get_unique_ids(auth):
    ids = set()
    for i in range(5):
        user, token = auth.register(f"User {i}", f"u{i}@x.com", 16, "secret1")
        assert auth.verify_credential(token) == user.id
        ids.add(user.id)
    assert len(ids) == 5


@pytest.mark.parametrize(
    "name,email,age,password,message",
    [
        (None, "a@x.com", 15, "secret1", "All fields are required"),
        ("Ana", "", 15, "secret1", "All fields are required"),
        ("Ana", "a@x.com", None, "secret1", "All fields are required"),
        ("Ana", "a@x.com", 15, None, "All fields are required"),
        ("Ana", "a@x.com", 12, "secret1", "Age must be between 13 and 19"),
        ("Ana", "a@x.com", 20, "secret1", "Age must be between 13 and 19"),
        ("Ana", "a@x.com", 15, "12345", "Password must be at least 6 characters long"),
    ],
)
def test_register_validation(auth, users, name, email, age, password, message):
    with pytest.raises(ValidationError) as exc:
        auth.register(name, email, age, password)
    assert exc.value.message == message
    assert len(users) == 0


def test_register_accepts_age_bounds(auth):
    auth.register("Low", "low@x.com", 13, "secret1")
    auth.register("High", "high@x.com", 19, "secret1")


def test_duplicate_email_conflicts_without_changing_state(auth, users):
    first, _ = auth.register("Ana", "ana@x.com", 15, "secret1")
    with pytest.raises(ConflictError):
        auth.register("Other", "ana@x.com", 17, "another1")

    assert len(users) == 1
    stored = users.find_by_email("ana@x.com")
    assert stored.name == "Ana"
    assert stored.id == first.id


def test_email_is_case_sensitive(auth):
    auth.register("Ana", "ana@x.com", 15, "secret1")
    other, _ = auth.register("Ana", "Ana@x.com", 15, "secret1")
    assert other.id == 2


def test_authenticate_issues_fresh_token(auth):
    user, _ = auth.register("Ana", "ana@x.com", 15, "secret1")
    logged, token = auth.authenticate("ana@x.com", "secret1")
    assert logged.id == user.id
    assert auth.verify_credential(token) == user.id


def test_authenticate_errors_do_not_reveal_which_field_failed(auth):
    auth.register("Ana", "ana@x.com", 15, "secret1")

    with pytest.raises(AuthError) as wrong_password:
        auth.authenticate("ana@x.com", "wrong-pass")
    with pytest.raises(AuthError) as unknown_email:
        auth.authenticate("nobody@x.com", "secret1")

    assert wrong_password.value.message == unknown_email.value.message == "Invalid email or password"


def test_authenticate_requires_both_fields(auth):
    with pytest.raises(ValidationError):
        auth.authenticate("", "secret1")
    with pytest.raises(ValidationError):
        auth.authenticate("ana@x.com", None)


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
def test_verify_rejects_missing_or_malformed(auth, token):
    with pytest.raises(AuthError):
        auth.verify_credential(token)


def test_verify_rejects_foreign_signature(auth):
    token = create_access_token(1, secret="someone-else")
    with pytest.raises(AuthError):
        auth.verify_credential(token)


def test_verify_rejects_expired_token(users):
    short = AuthService(users, secret=SECRET, token_ttl=timedelta(seconds=-60))
    user, token = short.register("Ana", "ana@x.com", 15, "secret1")
    with pytest.raises(AuthError):
        short.verify_credential(token)


def test_verify_rejects_token_without_integer_user_id(auth):
    token = create_access_token("1", secret=SECRET)
    with pytest.raises(AuthError):
        auth.verify_credential(token)


def test_verify_rejects_signed_token_without_expiry(auth):
    user, _ = auth.register("Ana", "ana@x.com", 15, "secret1")
    forever = jwt.encode({"userId": user.id}, SECRET, algorithm="HS256")
    with pytest.raises(AuthError):
        auth.verify_credential(forever)


@pytest.mark.parametrize("age", [True, "abc", 15.5, [15]])
def test_register_rejects_non_integer_age(auth, age):
    with pytest.raises(ValidationError) as exc:
        auth.register("Ana", "ana@x.com", age, "secret1")
    assert exc.value.message == "Age must be a whole number"


@pytest.mark.parametrize("age", ["15", " 16 ", 17.0])
def test_register_normalizes_numeric_age(auth, age):
    user, _ = auth.register("Ana", "ana@x.com", age, "secret1")
    assert isinstance(user.age, int)
    assert 15 <= user.age <= 17
