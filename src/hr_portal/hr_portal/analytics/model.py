from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class EmployeeMetrics:
    total: int = 0
    active: int = 0
    inactive: int = 0


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Dashboard analytics as sent by the backend, plus the derived fields the dashboard reads."""

    metrics: dict = field(default_factory=dict)
    department_stats: list = field(default_factory=list)
    hiring_trends: list = field(default_factory=list)
    attendance_summary: list = field(default_factory=list)
    payroll_history: list = field(default_factory=list)

    employee_metrics: EmployeeMetrics = field(default_factory=EmployeeMetrics)
    department_distribution: list = field(default_factory=list)
    leave_requests_count: int = 0

    @classmethod
    def from_payload(cls, body: Any) -> "AnalyticsSnapshot":
        data = body if isinstance(body, dict) else {}
        metrics = data.get("metrics") or {}
        department_stats = data.get("departmentStats") or []
        return cls(
            metrics=metrics,
            department_stats=department_stats,
            hiring_trends=data.get("hiringTrends") or [],
            attendance_summary=data.get("attendanceSummary") or [],
            payroll_history=data.get("payrollHistory") or [],
            employee_metrics=EmployeeMetrics(
                total=int(metrics.get("totalEmployees") or 0),
                active=int(metrics.get("activeEmployees") or 0),
                inactive=int(metrics.get("inactiveEmployees") or 0),
            ),
            department_distribution=[
                {"department": d.get("name"), "count": d.get("count", 0)}
                for d in department_stats
                if isinstance(d, dict)
            ],
            leave_requests_count=int(metrics.get("pendingLeaves") or 0),
        )

    def to_dict(self) -> dict:
        return asdict(self)
