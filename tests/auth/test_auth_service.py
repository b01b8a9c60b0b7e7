from __future__ import annotations

import pytest

from src.workforce_hub.workforce_hub.auth.service import generate_otp
from src.workforce_hub.workforce_hub.container import build_container
from src.workforce_hub.workforce_hub.core.enums import Role
from src.workforce_hub.workforce_hub.core.exceptions import (
    AuthorizationError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.parametrize("email", ["admin@example.com", "ADMIN@Example.COM", "  admin@example.com\t"])
def test_authenticate_ignores_case_and_surrounding_whitespace(container, email):
    result = container.auth_service.authenticate(email, "password")

    assert result.user.id == "admin-1"
    assert result.rotation_required is False
    assert result.session.active_org_id == "org-1"
    assert result.session.landing == "dashboard"


def test_super_user_lands_on_super_tab_without_org(container):
    result = container.auth_service.authenticate("matt.c@forgeacademy.co.za", "password")

    assert result.session.role == Role.SUPER_USER
    assert result.session.active_org_id is None
    assert result.session.landing == "super"


def test_unknown_email_and_wrong_password_fail_the_same_way(container):
    with pytest.raises(InvalidCredentialsError) as unknown:
        container.auth_service.authenticate("nobody@example.com", "password")
    with pytest.raises(InvalidCredentialsError) as wrong:
        container.auth_service.authenticate("admin@example.com", "nope")

    assert str(unknown.value) == str(wrong.value)


def test_generate_otp_stays_within_six_digits():
    for _ in range(500):
        otp = generate_otp()
        assert len(otp) == 6
        assert 100000 <= int(otp) <= 999999


def test_issue_one_time_credential_forces_rotation():
    container = build_container(seed_demo=True)

    credential = container.auth_service.issue_one_time_credential("user-5")

    assert 100000 <= int(credential.otp) <= 999999
    assert container.store.users.get_by_id("user-5").must_change_password is True


def test_issue_one_time_credential_unknown_user(container):
    with pytest.raises(NotFoundError):
        container.auth_service.issue_one_time_credential("user-404")


def test_rotation_gate_withholds_session_until_finalized(container, fixed_otp):
    container.auth_service.issue_one_time_credential("user-3")

    held = container.auth_service.authenticate("charlie@example.com", fixed_otp)
    assert held.rotation_required is True
    assert held.session is None

    s_user = container.auth_service.finalize_rotation("user-3", "brand-new-secret")
    assert s_user.user_id == "user-3"
    assert s_user.active_org_id == "org-1"

    again = container.auth_service.authenticate("charlie@example.com", "brand-new-secret")
    assert again.rotation_required is False
    assert again.session is not None


def test_otp_stops_working_after_rotation(container, fixed_otp):
    container.auth_service.issue_one_time_credential("user-3")
    container.auth_service.finalize_rotation("user-3", "brand-new-secret")

    with pytest.raises(InvalidCredentialsError):
        container.auth_service.authenticate("charlie@example.com", fixed_otp)


@pytest.mark.parametrize("password", ["", "   "])
def test_finalize_rotation_rejects_blank_password(container, password):
    container.auth_service.issue_one_time_credential("user-3")

    with pytest.raises(ValidationError):
        container.auth_service.finalize_rotation("user-3", password)


def test_finalize_rotation_requires_pending_rotation(container):
    with pytest.raises(ValidationError):
        container.auth_service.finalize_rotation("user-5", "whatever")


def test_reset_security_key_invalidates_previous_password(container, as_user, fixed_otp):
    admin = as_user("admin-1")

    credential = container.auth_service.reset_security_key(admin, "user-3")

    assert credential.otp == fixed_otp
    assert credential.user_name == "Charlie Member"
    target = container.store.users.get_by_id("user-3")
    assert target.must_change_password is True
    with pytest.raises(InvalidCredentialsError):
        container.auth_service.authenticate("charlie@example.com", "password")
    assert container.auth_service.authenticate("charlie@example.com", fixed_otp).rotation_required is True


def test_reset_security_key_is_audited_in_active_org(container, as_user):
    container.auth_service.reset_security_key(as_user("admin-1", "org-2"), "user-4")

    assert container.store.organizations.get_by_id("org-2").logs[-1] == "[AUTH] Security key reset for Diana Member"


def test_admin_cannot_reset_key_outside_active_org(container, as_user):
    with pytest.raises(AuthorizationError):
        container.auth_service.reset_security_key(as_user("admin-1", "org-1"), "user-4")


def test_member_cannot_reset_keys(container, as_user):
    with pytest.raises(AuthorizationError):
        container.auth_service.reset_security_key(as_user("user-3"), "user-5")


def test_super_user_resets_admin_keys_only(container, as_user):
    super_user = as_user("super-1")

    assert container.auth_service.reset_security_key(super_user, "admin-2").user_id == "admin-2"
    with pytest.raises(AuthorizationError):
        container.auth_service.reset_security_key(super_user, "user-3")
