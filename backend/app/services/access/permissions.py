"""
Page/action permission evaluation.

Everything here is a pure function of its arguments: the caller loads the
user's role and grants (see ``app.core.deps.get_access_context``) and passes
them in explicitly.
"""
from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    system_admin = "مدير النظام"
    manager = "مدير"
    sales_staff = "موظف مبيعات"
    accountant = "محاسب"
    staff = "موظف"


ELEVATED_ROLES = frozenset({Role.system_admin, Role.manager})


class Page(str, Enum):
    dashboard = "dashboard"
    projects = "projects"
    sales = "sales"
    purchases = "purchases"
    invoices = "invoices"
    extracts = "extracts"
    assignment_orders = "assignment_orders"
    contractors = "contractors"
    suppliers = "suppliers"
    maintenance = "maintenance"
    tasks = "tasks"
    warehouse = "warehouse"
    accounting = "accounting"
    reports = "reports"
    notifications = "notifications"
    settings = "settings"


class Action(str, Enum):
    view = "view"
    create = "create"
    edit = "edit"
    delete = "delete"


class GuardState(str, Enum):
    loading = "loading"
    denied = "denied"
    granted = "granted"


ACCESS_DENIED_MESSAGE = "غير مصرح لك بالوصول"


def _parse_enum(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    s = value.strip()
    try:
        return enum_cls(s)
    except ValueError:
        pass
    return enum_cls.__members__.get(s)


def parse_role(value: Any) -> Role | None:
    """Accepts a Role, its stored value or its member name; anything else is None."""
    return _parse_enum(Role, value)


def parse_page(value: Any) -> Page | None:
    return _parse_enum(Page, value)


def parse_action(value: Any) -> Action | None:
    return _parse_enum(Action, value)


def is_elevated(role: Any) -> bool:
    return parse_role(role) in ELEVATED_ROLES


@dataclass(frozen=True)
class PermissionGrant:
    user_id: Any
    page_name: str
    can_view: bool = False
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False
    updated_at: dt.datetime | None = None

    @classmethod
    def from_row(cls, row: Any) -> "PermissionGrant":
        if isinstance(row, Mapping):
            get = row.get
        else:
            def get(name, default=None):
                return getattr(row, name, default)
        return cls(
            user_id=get("user_id"),
            page_name=get("page_name") or "",
            can_view=bool(get("can_view", False)),
            can_create=bool(get("can_create", False)),
            can_edit=bool(get("can_edit", False)),
            can_delete=bool(get("can_delete", False)),
            updated_at=_as_datetime(get("updated_at")),
        )

    def allows(self, action: Action) -> bool:
        if action is Action.view:
            return self.can_view
        if action is Action.create:
            return self.can_create
        if action is Action.edit:
            return self.can_edit
        if action is Action.delete:
            return self.can_delete
        return False


def _as_datetime(v: Any) -> dt.datetime | None:
    """datetime, date or ISO-8601 string (trailing Z allowed); anything else is None."""
    if isinstance(v, dt.datetime):
        return v
    if isinstance(v, dt.date):
        return dt.datetime(v.year, v.month, v.day, tzinfo=dt.timezone.utc)
    if isinstance(v, str) and v.strip():
        s = v.strip()
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            return dt.datetime.fromisoformat(s)
        except ValueError:
            return None
    return None


def _recency(grant: PermissionGrant) -> float:
    ts = _as_datetime(grant.updated_at)
    if ts is None:
        return float("-inf")
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    try:
        return ts.timestamp()
    except (OverflowError, OSError, ValueError):
        return float("-inf")


def find_grant(grants: Iterable[PermissionGrant], user_id: Any, page: Page) -> PermissionGrant | None:
    """
    Grant for (user_id, page). (user_id, page_name) is unique in storage; if
    duplicates still show up the latest updated_at wins, ties go to the later one.
    """
    best: PermissionGrant | None = None
    for g in grants:
        if g.user_id != user_id or parse_page(g.page_name) is not page:
            continue
        if best is None or _recency(g) >= _recency(best):
            best = g
    return best


def check_permission(
    role: Any,
    grants: Iterable[PermissionGrant],
    user_id: Any,
    page_name: Any,
    action: Any,
) -> bool:
    page = parse_page(page_name)
    act = parse_action(action)
    if page is None or act is None:
        return False

    if is_elevated(role):
        return True

    if user_id is None:
        return False
    grant = find_grant(grants, user_id, page)
    if grant is None:
        return False
    return grant.allows(act)


@dataclass(frozen=True)
class AccessContext:
    user_id: Any
    role: Role | None = None
    grants: tuple[PermissionGrant, ...] = field(default_factory=tuple)
    loaded: bool = True

    def can(self, page_name: Any, action: Any = Action.view) -> bool:
        return check_permission(self.role, self.grants, self.user_id, page_name, action)


def allowed_actions(ctx: AccessContext, page_name: Any) -> frozenset[Action]:
    if not ctx.loaded:
        return frozenset()
    return frozenset(a for a in Action if ctx.can(page_name, a))


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    message: str | None = None

    @property
    def granted(self) -> bool:
        return self.state is GuardState.granted


def evaluate_guard(ctx: AccessContext | None, page_name: Any, action: Any = Action.view) -> GuardDecision:
    # role/grants not fetched yet: evaluating now would deny every ordinary user
    if ctx is None or not ctx.loaded:
        return GuardDecision(GuardState.loading)
    if ctx.can(page_name, action):
        return GuardDecision(GuardState.granted)
    return GuardDecision(GuardState.denied, ACCESS_DENIED_MESSAGE)
