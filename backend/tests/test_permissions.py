import datetime as dt

from app.services.access.permissions import (
    ACCESS_DENIED_MESSAGE,
    AccessContext,
    Action,
    GuardState,
    Page,
    PermissionGrant,
    Role,
    allowed_actions,
    check_permission,
    evaluate_guard,
    find_grant,
    parse_page,
    parse_role,
)

ORDINARY = (Role.staff, Role.sales_staff, Role.accountant, None)


def test_default_deny_without_grants():
    for role in ORDINARY:
        for page in Page:
            for action in Action:
                assert check_permission(role, [], 7, page.value, action.value) is False


def test_elevated_roles_bypass_grants():
    denied = [PermissionGrant(user_id=1, page_name=p.value) for p in Page]
    for role in (Role.system_admin, Role.manager):
        for page in Page:
            for action in Action:
                assert check_permission(role, denied, 1, page, action) is True
                assert check_permission(role, [], 1, page, action) is True


def test_grant_fidelity():
    g = PermissionGrant(user_id="u1", page_name="sales", can_view=True)
    assert check_permission(Role.staff, [g], "u1", "sales", "view") is True
    assert check_permission(Role.staff, [g], "u1", "sales", "create") is False
    assert check_permission(Role.staff, [g], "u1", "sales", "edit") is False
    assert check_permission(Role.staff, [g], "u1", "sales", "delete") is False
    # grant of another page does not leak
    assert check_permission(Role.staff, [g], "u1", "invoices", "view") is False


def test_grant_of_other_user_is_ignored():
    g = PermissionGrant(user_id=2, page_name="reports", can_view=True)
    assert check_permission(Role.accountant, [g], 3, "reports", "view") is False


def test_unknown_page_or_action_is_denied():
    g = PermissionGrant(user_id=1, page_name="payroll", can_view=True)
    assert check_permission(Role.staff, [g], 1, "payroll", "view") is False
    assert check_permission(Role.system_admin, [], 1, "payroll", "view") is False
    assert check_permission(Role.staff, [], 1, "sales", "approve") is False
    assert check_permission(Role.manager, [], 1, None, "view") is False


def test_role_accepts_stored_value_and_name():
    assert parse_role("مدير النظام") is Role.system_admin
    assert parse_role("manager") is Role.manager
    assert parse_role("مدير مشروع") is None
    assert check_permission("مدير", [], 1, "tasks", "delete") is True
    assert check_permission("superuser", [], 1, "tasks", "view") is False


def test_page_names_are_trimmed_but_closed():
    assert parse_page(" sales ") is Page.sales
    assert parse_page("Sales") is None


def test_duplicate_grants_latest_updated_wins():
    old = PermissionGrant(user_id=1, page_name="tasks", can_view=True, updated_at=dt.datetime(2025, 1, 1))
    new = PermissionGrant(user_id=1, page_name="tasks", can_view=False, updated_at=dt.datetime(2025, 6, 1))
    assert check_permission(Role.staff, [new, old], 1, "tasks", "view") is False
    assert check_permission(Role.staff, [old, new], 1, "tasks", "view") is False


def test_duplicate_grants_without_timestamp_last_wins():
    a = PermissionGrant(user_id=1, page_name="tasks", can_edit=True)
    b = PermissionGrant(user_id=1, page_name="tasks", can_edit=False)
    assert find_grant([a, b], 1, Page.tasks) is b
    assert check_permission(Role.staff, [b, a], 1, "tasks", "edit") is True


def test_grant_from_row_mapping():
    g = PermissionGrant.from_row({"user_id": 5, "page_name": "warehouse", "can_view": 1, "can_delete": None})
    assert g.can_view is True
    assert g.can_delete is False


def test_guard_loading_evaluates_nothing():
    assert evaluate_guard(None, "sales").state is GuardState.loading
    ctx = AccessContext(user_id=1, role=Role.staff, loaded=False)
    d = evaluate_guard(ctx, "sales")
    assert d.state is GuardState.loading
    assert d.message is None


def test_guard_denied_message_is_fixed():
    ctx = AccessContext(user_id=1, role=Role.staff)
    for page in ("sales", "accounting", "no-such-page"):
        d = evaluate_guard(ctx, page)
        assert d.state is GuardState.denied
        assert d.message == ACCESS_DENIED_MESSAGE


def test_guard_granted():
    ctx = AccessContext(
        user_id=1,
        role=Role.sales_staff,
        grants=(PermissionGrant(user_id=1, page_name="sales", can_view=True, can_create=True),),
    )
    assert evaluate_guard(ctx, "sales").granted
    assert not evaluate_guard(ctx, "sales", Action.delete).granted


def test_allowed_actions():
    ctx = AccessContext(
        user_id=1,
        role=Role.accountant,
        grants=(PermissionGrant(user_id=1, page_name="invoices", can_view=True, can_edit=True),),
    )
    assert allowed_actions(ctx, Page.invoices) == {Action.view, Action.edit}
    assert allowed_actions(ctx, Page.sales) == frozenset()
    admin = AccessContext(user_id=2, role=Role.system_admin)
    assert allowed_actions(admin, Page.sales) == set(Action)
    assert allowed_actions(AccessContext(user_id=2, role=Role.system_admin, loaded=False), Page.sales) == frozenset()


def test_duplicate_grants_from_rows_with_string_timestamps():
    rows = [
        {"user_id": 1, "page_name": "sales", "can_view": False, "updated_at": "2025-06-01T00:00:00Z"},
        {"user_id": 1, "page_name": "sales", "can_view": True, "updated_at": "2025-01-01T08:30:00+03:00"},
    ]
    grants = [PermissionGrant.from_row(r) for r in rows]
    assert grants[0].updated_at == dt.datetime(2025, 6, 1, tzinfo=dt.timezone.utc)
    assert check_permission(Role.staff, grants, 1, "sales", "view") is False
    assert check_permission(Role.staff, list(reversed(grants)), 1, "sales", "view") is False


def test_duplicate_grants_with_odd_timestamps_do_not_raise():
    newer = PermissionGrant(user_id=1, page_name="tasks", can_view=True, updated_at=dt.date(2025, 6, 1))
    older = PermissionGrant(user_id=1, page_name="tasks", can_view=False, updated_at=dt.date(2025, 1, 1))
    assert check_permission(Role.staff, [newer, older], 1, "tasks", "view") is True

    junk = PermissionGrant.from_row({"user_id": 1, "page_name": "tasks", "can_edit": True, "updated_at": "yesterday"})
    assert junk.updated_at is None
    stamped = PermissionGrant(user_id=1, page_name="tasks", can_edit=False, updated_at=dt.datetime(2025, 1, 1))
    assert check_permission(Role.staff, [stamped, junk], 1, "tasks", "edit") is False
    unparsed = PermissionGrant(user_id=1, page_name="tasks", can_edit=True, updated_at="bad")
    assert check_permission(Role.staff, [unparsed, stamped], 1, "tasks", "edit") is False
