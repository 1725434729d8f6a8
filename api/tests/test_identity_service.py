import pytest
from pydantic import ValidationError as PydanticValidationError

from mdd_api.core.exceptions import ErrorKind
from mdd_api.models import User
from mdd_api.services.identity_service import load_principal


def test_load_principal_by_email_is_default(session, make_user):
    bob = make_user("bob", email="bob@x.com", password="secret")

    principal = load_principal(session, "bob@x.com").unwrap()

    assert principal.identifier == "bob@x.com"
    assert principal.password_hash == bob.password
    assert principal.authorities == ()


def test_load_principal_by_username(session, make_user):
    make_user("bob", email="bob@x.com")

    principal = load_principal(session, "bob", login_identifier="username").unwrap()

    assert principal.identifier == "bob"
    assert principal.password_hash == User.hash_password("secret")


def test_load_principal_follows_configured_identifier(session, make_user, monkeypatch):
    from mdd_api.core.config import settings

    make_user("bob", email="bob@x.com")
    monkeypatch.setattr(settings, "login_identifier", "username")

    assert load_principal(session, "bob").ok
    assert load_principal(session, "bob@x.com").kind is ErrorKind.AUTHENTICATION_FAILURE


def test_load_principal_unknown_identifier_is_authentication_failure(session):
    result = load_principal(session, "nobody@x.com")

    assert result.kind is ErrorKind.AUTHENTICATION_FAILURE
    assert result.error.message == "No user with this email"


def test_load_principal_unsupported_identifier_is_lookup_failure(session):
    result = load_principal(session, "bob", login_identifier="phone")

    assert result.kind is ErrorKind.LOOKUP_FAILURE


def test_principal_is_immutable_and_hides_hash(session, make_user):
    make_user("bob")
    principal = load_principal(session, "bob@x.com").unwrap()

    with pytest.raises(PydanticValidationError):
        principal.authorities = ("ADMIN",)
    assert principal.password_hash not in repr(principal)
