from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import check_password_hash

from permission_system.accounts.policy import account_list_scope
from permission_system.core.enums import Role, SortOrder
from permission_system.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateEmailError,
    NotFoundError,
    ValidationError,
)


def test_register_forces_user_role_and_unverified(container, accounts_repo):
    account = container.account_service.register(name="Andi", email="andi@example.com", password="secret123")

    stored = accounts_repo.get_by_id(account.account_id)
    assert stored.role is Role.USER
    assert stored.verified is False
    assert stored.password_hash != "secret123"
    assert check_password_hash(stored.password_hash, "secret123")


def test_register_verificator_forces_verifier_role_and_verified(container):
    account = container.account_service.register_verificator(
        name="Vera", email="vera@example.com", password="secret123"
    )

    assert account.role is Role.VERIFIER
    assert account.verified is True


@pytest.mark.parametrize("name", ["", "ab", "x" * 33, None])
def test_register_rejects_invalid_name(container, name):
    with pytest.raises(ValidationError):
        container.account_service.register(name=name, email="a@example.com", password="secret123")


def test_register_checks_name_length_as_sent(container):
    padded = container.account_service.register(name=" Al ", email="al@example.com", password="secret123")

    assert padded.name == " Al "
    with pytest.raises(ValidationError):
        container.account_service.register(name=" " + "x" * 32, email="x@example.com", password="secret123")


def test_register_requires_email_and_password(container):
    with pytest.raises(ValidationError):
        container.account_service.register(name="Andi", email="", password="secret123")
    with pytest.raises(ValidationError):
        container.account_service.register(name="Andi", email="a@example.com", password="")


def test_duplicate_email_status_depends_on_operation(container, accounts_repo):
    accounts_repo.add(name="Andi", email="andi@example.com")

    with pytest.raises(DuplicateEmailError) as user_err:
        container.account_service.register(name="Other", email="andi@example.com", password="secret123")
    with pytest.raises(DuplicateEmailError) as verifier_err:
        container.account_service.register_verificator(name="Other", email="andi@example.com", password="secret123")

    assert user_err.value.status_code == 422
    assert verifier_err.value.status_code == 409


def test_login_returns_token_with_identity(container, accounts_repo):
    account = accounts_repo.add(name="Andi", email="andi@example.com", password="secret123")

    token = container.auth_service.login("andi@example.com", "secret123")

    caller = container.tokens.decode(token)
    assert caller.account_id == account.account_id
    assert caller.role is Role.USER
    assert caller.name == "Andi"


def test_login_unknown_email_and_wrong_password_fail_identically(container, accounts_repo):
    accounts_repo.add(name="Andi", email="andi@example.com", password="secret123")

    with pytest.raises(AuthenticationError) as wrong_password:
        container.auth_service.login("andi@example.com", "nope-nope")
    with pytest.raises(AuthenticationError) as unknown_email:
        container.auth_service.login("ghost@example.com", "secret123")

    assert str(wrong_password.value) == str(unknown_email.value) == "Incorrect email or password"
    assert wrong_password.value.status_code == unknown_email.value.status_code == 401


def test_reset_password_uses_configured_default(container, accounts_repo):
    account = accounts_repo.add(name="Andi", email="andi@example.com", password="secret123")

    container.account_service.reset_password(account.account_id)

    assert check_password_hash(accounts_repo.get_by_id(account.account_id).password_hash, "reset-me-123")


def test_reset_password_unknown_account(container):
    with pytest.raises(NotFoundError):
        container.account_service.reset_password("missing")


def test_change_own_password_checks_old_password(container, accounts_repo):
    account = accounts_repo.add(name="Andi", email="andi@example.com", password="secret123")

    with pytest.raises(ValidationError, match="Old password is incorrect"):
        container.account_service.change_own_password(
            account.account_id, old_password="wrong-one", new_password="brand-new"
        )

    container.account_service.change_own_password(
        account.account_id, old_password="secret123", new_password="brand-new"
    )
    assert check_password_hash(accounts_repo.get_by_id(account.account_id).password_hash, "brand-new")


def test_change_own_password_enforces_min_length(container, accounts_repo):
    account = accounts_repo.add(name="Andi", email="andi@example.com", password="secret123")

    with pytest.raises(ValidationError):
        container.account_service.change_own_password(
            account.account_id, old_password="secret123", new_password="short"
        )


def test_promote_sets_role_and_verified(container, accounts_repo):
    account = accounts_repo.add(name="Andi", email="andi@example.com")

    container.account_service.promote_to_verificator(account.account_id)

    stored = accounts_repo.get_by_id(account.account_id)
    assert stored.role is Role.VERIFIER
    assert stored.verified is True


def test_promote_unknown_account(container):
    with pytest.raises(NotFoundError):
        container.account_service.promote_to_verificator("missing")


def test_toggle_verified_twice_restores_original_value(container, accounts_repo):
    account = accounts_repo.add(name="Andi", email="andi@example.com", verified=False)

    assert container.account_service.toggle_verified(account.account_id) is True
    assert container.account_service.toggle_verified(account.account_id) is False
    assert accounts_repo.get_by_id(account.account_id).verified is False


def test_find_by_id_unknown(container):
    with pytest.raises(NotFoundError):
        container.account_service.find_by_id("missing")


def test_admin_listing_filters_by_name_sorted_ascending(container, accounts_repo):
    accounts_repo.add(name="Admin", email="root@example.com", role=Role.ADMIN)
    dani = accounts_repo.add(name="Dani", email="dani@example.com")
    accounts_repo.add(name="Budi", email="budi@example.com")
    hana = accounts_repo.add(name="HANA", email="hana@example.com", role=Role.VERIFIER)

    scope = account_list_scope(Role.ADMIN)
    rows, paging = container.account_service.list_accounts(
        page=1, size=10, search="an", order=SortOrder.ASC, allowed_roles=scope.roles
    )

    assert [a.account_id for a in rows] == [dani.account_id, hana.account_id]
    assert paging.total_item == 2
    assert paging.total_page == 1


def test_verifier_listing_only_sees_users_and_can_filter_verified(container, accounts_repo):
    verified_user = accounts_repo.add(name="Vina", email="vina@example.com", verified=True)
    accounts_repo.add(name="Uno", email="uno@example.com", verified=False)
    accounts_repo.add(name="Vera", email="vera@example.com", role=Role.VERIFIER, verified=True)

    scope = account_list_scope(Role.VERIFIER, "true")
    rows, _ = container.account_service.list_accounts(
        page=1, size=10, allowed_roles=scope.roles, verified=scope.verified
    )

    assert [a.account_id for a in rows] == [verified_user.account_id]


def test_listing_embeds_each_accounts_permissions(container, accounts_repo, permissions_repo):
    owner = accounts_repo.add(name="Andi", email="andi@example.com")
    permissions_repo.create(
        account_id=owner.account_id,
        title="Leave",
        reason="Family",
        start_date=date(2026, 3, 1),
        end_date=date(2026, 3, 2),
    )

    rows, _ = container.account_service.list_accounts(page=1, size=10, allowed_roles=(Role.USER,))

    assert len(rows[0].permissions) == 1
    assert rows[0].to_dict(include_permissions=True)["permissions"][0]["title"] == "Leave"
    assert "password_hash" not in rows[0].to_dict()


def test_listing_paginates(container, accounts_repo):
    for i in range(25):
        accounts_repo.add(name=f"User {i:02d}", email=f"u{i}@example.com")

    rows, paging = container.account_service.list_accounts(
        page=3, size=10, order=SortOrder.ASC, allowed_roles=(Role.USER,)
    )

    assert [a.name for a in rows] == [f"User {i:02d}" for i in range(20, 25)]
    assert paging.total_page == 3
    assert paging.has_next is False
    assert paging.has_previous is True


def test_user_role_cannot_list_accounts():
    with pytest.raises(AuthorizationError):
        account_list_scope(Role.USER)


def test_admin_scope_ignores_verified_filter():
    scope = account_list_scope(Role.ADMIN, "true")

    assert set(scope.roles) == {Role.USER, Role.VERIFIER}
    assert scope.verified is None


@pytest.mark.parametrize("raw, expected", [("true", True), ("false", False), ("yes", None), (None, None)])
def test_verifier_scope_parses_verified_filter(raw, expected):
    scope = account_list_scope(Role.VERIFIER, raw)

    assert scope.roles == (Role.USER,)
    assert scope.verified is expected
