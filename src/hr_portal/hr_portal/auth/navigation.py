"""Client route surface and the role-gated navigation menu."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.constants import HOME_PATH, LOGIN_PATH, PENDING_APPROVAL_PATH
from ..core.enums import Role
from .model import Identity

ADMIN_HR = (Role.ADMIN, Role.HR)
EMPLOYEE_ONLY = (Role.EMPLOYEE,)


@dataclass(frozen=True)
class RouteSpec:
    path: str
    public: bool = False
    # Empty means any authenticated identity.
    allowed_roles: Tuple[Role, ...] = ()


ROUTES: Tuple[RouteSpec, ...] = (
    RouteSpec(LOGIN_PATH, public=True),
    RouteSpec("/signup", public=True),
    RouteSpec(PENDING_APPROVAL_PATH, public=True),
    RouteSpec(HOME_PATH),
    RouteSpec("/settings"),
    RouteSpec("/employees", allowed_roles=ADMIN_HR),
    RouteSpec("/departments", allowed_roles=ADMIN_HR),
    RouteSpec("/designations", allowed_roles=ADMIN_HR),
    RouteSpec("/salary", allowed_roles=ADMIN_HR),
    RouteSpec("/payroll", allowed_roles=ADMIN_HR),
    RouteSpec("/attendance", allowed_roles=EMPLOYEE_ONLY),
    RouteSpec("/attendance-report", allowed_roles=ADMIN_HR),
    RouteSpec("/leaves", allowed_roles=EMPLOYEE_ONLY),
    RouteSpec("/leave-management", allowed_roles=ADMIN_HR),
    RouteSpec("/employee-profile", allowed_roles=EMPLOYEE_ONLY),
    RouteSpec("/employee-salary", allowed_roles=EMPLOYEE_ONLY),
    RouteSpec("/employee-payroll", allowed_roles=EMPLOYEE_ONLY),
    RouteSpec("/register", allowed_roles=ADMIN_HR),
    RouteSpec("/analytics", allowed_roles=ADMIN_HR),
    RouteSpec("/pending-users", allowed_roles=ADMIN_HR),
)

_BY_PATH = {r.path: r for r in ROUTES}


def route_for(path: str) -> Optional[RouteSpec]:
    normalized = "/" + path.strip("/") if path.strip("/") else HOME_PATH
    return _BY_PATH.get(normalized)


def resolve_path(path: str) -> str:
    """Unmatched paths land on the home route."""
    spec = route_for(path)
    return spec.path if spec else HOME_PATH


@dataclass(frozen=True)
class MenuItem:
    label: str
    path: str
    roles: Tuple[Role, ...] = ()


MENU: Tuple[MenuItem, ...] = (
    MenuItem("Dashboard", HOME_PATH),
    MenuItem("Department", "/departments", ADMIN_HR),
    MenuItem("Designation", "/designations", ADMIN_HR),
    MenuItem("Employee", "/employees", ADMIN_HR),
    MenuItem("Salary", "/salary", ADMIN_HR),
    MenuItem("Payroll", "/payroll", ADMIN_HR),
    MenuItem("Attendance", "/attendance", EMPLOYEE_ONLY),
    MenuItem("Attendance Report", "/attendance-report", ADMIN_HR),
    MenuItem("Analytics", "/analytics", ADMIN_HR),
    MenuItem("Leave", "/leaves", EMPLOYEE_ONLY),
    MenuItem("Leave Management", "/leave-management", ADMIN_HR),
    MenuItem("Pending Users", "/pending-users", ADMIN_HR),
    MenuItem("Register", "/register", (Role.ADMIN,)),
    MenuItem("My Profile", "/employee-profile", EMPLOYEE_ONLY),
    MenuItem("My Salary", "/employee-salary", EMPLOYEE_ONLY),
    MenuItem("Payroll", "/employee-payroll", EMPLOYEE_ONLY),
    MenuItem("Settings", "/settings"),
)


def navigation_for(identity: Optional[Identity]) -> list[MenuItem]:
    if identity is None:
        return []
    return [item for item in MENU if not item.roles or identity.has_role(*item.roles)]
