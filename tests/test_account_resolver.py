from __future__ import annotations

import pytest

from gh_langs.application.account_resolver import classify_account, resolve_account
from gh_langs.domain.errors import InvalidAccount, NoCurrentUser
from gh_langs.domain.repository import AccountType
from gh_langs.infrastructure.identity import IdentityLookupError


def _no_identity() -> str:
    raise AssertionError("identity lookup should not be called")


def test_classify_account() -> None:
    assert classify_account({"type": "Organization"}) is AccountType.ORGANIZATION
    assert classify_account({"type": "User"}) is AccountType.USER
    assert classify_account({"type": "Bot"}) is AccountType.USER
    assert classify_account({}) is AccountType.USER


def test_resolve_named_organization(fake_client_cls) -> None:
    client = fake_client_cls(profiles={"golang": {"login": "golang", "type": "Organization"}})
    assert resolve_account(client, "golang", _no_identity) == (AccountType.ORGANIZATION, "golang")


def test_resolve_named_user(fake_client_cls) -> None:
    client = fake_client_cls(profiles={"octocat": {"login": "octocat", "type": "User"}})
    assert resolve_account(client, "octocat", _no_identity) == (AccountType.USER, "octocat")


def test_resolve_unknown_account_raises(fake_client_cls) -> None:
    client = fake_client_cls()
    with pytest.raises(InvalidAccount) as exc:
        resolve_account(client, "no-such-account", _no_identity)
    assert exc.value.account == "no-such-account"
    assert "no-such-account is not a valid GitHub username" in str(exc.value)


def test_resolve_current_user(fake_client_cls) -> None:
    client = fake_client_cls(profiles={"me": {"login": "me", "type": "User"}})
    assert resolve_account(client, None, lambda: "me") == (AccountType.USER, "me")


def test_resolve_current_user_lookup_failure(fake_client_cls) -> None:
    client = fake_client_cls()

    def failing() -> str:
        raise IdentityLookupError("gh CLI not found and no GITHUB_TOKEN set")

    with pytest.raises(NoCurrentUser) as exc:
        resolve_account(client, "", failing)
    assert "gh CLI not found" in str(exc.value)


def test_resolve_current_user_empty_login(fake_client_cls) -> None:
    with pytest.raises(NoCurrentUser):
        resolve_account(fake_client_cls(), None, lambda: "")
