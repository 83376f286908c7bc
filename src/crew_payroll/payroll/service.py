from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Hashable, Iterable, List, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateRange, month_end, month_start
from ..common.formatting import format_hour_minute, format_money, format_time_of_day, round_money
from ..core.constants import DEFAULT_WEEK_STARTS_ON
from ..core.enums import EmployeeType, Granularity
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..jobsites.repository import JobSiteRepository
from . import grouping
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .engine import aggregate
from .model import AggregateTotals, PayrollLine

logger = get_logger(__name__)


@dataclass(frozen=True)
class PayrollReport:
    rows: list[dict]
    totals: AggregateTotals
    warnings: list[dict]


@dataclass(frozen=True)
class EmployeeReport:
    employee: Employee
    totals: AggregateTotals
    rows: list[dict]
    warnings: list[dict]


@dataclass(frozen=True)
class MasterSummary:
    total_employees: int
    total_jobsites: int
    total_hours: Decimal
    total_payroll: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    total_employees: int
    total_pms: int
    total_jobsites: int
    active_jobsites: int
    today_attendance: int
    total_payroll: Decimal


@dataclass(frozen=True)
class ReportFilters:
    """Optional narrowing applied on top of the date range.

    Empty id lists mean "everything", like an untouched multi-select.
    """

    employee_ids: Sequence[Hashable] = ()
    jobsite_ids: Sequence[Hashable] = ()
    employee_type: Optional[EmployeeType] = None
    search: Optional[str] = ""


class PayrollReportService:
    """Builds every payroll view from one pass: fetch entries, compute lines, fold."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        jobsites: JobSiteRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
    ):
        self._attendance = attendance
        self._employees = employees
        self._jobsites = jobsites
        self._calculator = calculator or StandardPayrollCalculator()
        self._week_starts_on = int(week_starts_on)

    # -- shared pipeline -------------------------------------------------

    def _compute(self, period: DateRange, filters: ReportFilters) -> tuple[List[PayrollLine], Dict[Hashable, Employee]]:
        entries = self._attendance.list_entries(
            start_date=period.start,
            end_date=period.end,
            employee_ids=list(filters.employee_ids) or None,
            jobsite_ids=list(filters.jobsite_ids) or None,
        )
        employees = {e.employee_id: e for e in self._employees.list_all()}

        try:
            employee_type = EmployeeType(filters.employee_type) if filters.employee_type else None
        except ValueError as exc:
            raise ValidationError(f"Unknown employee type: {filters.employee_type!r}") from exc
        needle = (filters.search or "").strip().lower()

        lines: List[PayrollLine] = []
        for entry in entries:
            employee = employees.get(entry.employee_id)
            if employee_type and (employee is None or employee.employee_type != employee_type):
                continue
            if needle and (employee is None or needle not in employee.full_name.lower()):
                continue
            lines.append(self._calculator.compute_line(entry, employee.rate if employee else None))

        flagged = sum(1 for line in lines if line.has_warnings)
        if flagged:
            logger.warning(
                "%d of %d attendance entries between %s and %s have data-quality warnings",
                flagged,
                len(lines),
                period.start,
                period.end,
            )
        return lines, employees

    @staticmethod
    def _period(start: date, end: date) -> DateRange:
        if start is None or end is None:
            raise ValidationError("Both start and end dates are required")
        return DateRange(start, end)

    def _jobsite_names(self) -> Dict[Hashable, str]:
        return {j.jobsite_id: j.name for j in self._jobsites.list_all()}

    @staticmethod
    def _warning_rows(lines: Iterable[PayrollLine]) -> list[dict]:
        return [
            {
                "attendance_id": line.entry.attendance_id,
                "employee_id": line.entry.employee_id,
                "date": line.entry.date.strftime("%Y-%m-%d"),
                "warnings": [w.value for w in line.warnings],
            }
            for line in lines
            if line.has_warnings
        ]

    @staticmethod
    def _line_row(line: PayrollLine, employee: Optional[Employee], jobsite_name: str) -> dict:
        e = line.entry
        return {
            "attendance_id": e.attendance_id,
            "employee_id": e.employee_id,
            "employee_name": employee.full_name if employee else "",
            "employee_type": employee.employee_type.value if employee else "",
            "jobsite_id": e.jobsite_id,
            "jobsite_name": jobsite_name,
            "date": e.date.strftime("%Y-%m-%d"),
            "start": format_time_of_day(e.start_time),
            "end": format_time_of_day(e.end_time),
            "shift_hours": line.shift_hours,
            "deducted_hours": line.deducted_hours,
            "total_hours": line.total_hours,
            "regular_hours": line.regular_hours,
            "overtime_hours": line.overtime_hours,
            "regular_rate": line.regular_rate,
            "overtime_rate": line.overtime_rate,
            "regular_pay": round_money(line.regular_pay),
            "overtime_pay": round_money(line.overtime_pay),
            "total_pay": round_money(line.total_pay),
            "display": {
                "shift_hours": format_hour_minute(line.shift_hours),
                "deducted_hours": format_hour_minute(line.deducted_hours),
                "total_hours": format_hour_minute(line.total_hours),
                "regular_hours": format_hour_minute(line.regular_hours),
                "overtime_hours": format_hour_minute(line.overtime_hours),
                "total_pay": format_money(line.total_pay),
            },
            "warnings": [w.value for w in line.warnings],
        }

    @staticmethod
    def _totals_row(totals: AggregateTotals) -> dict:
        return {
            "total_hours": totals.total_hours,
            "total_days": totals.total_days,
            "average_hours_per_day": totals.average_hours_per_day,
            "regular_hours": totals.regular_hours,
            "overtime_hours": totals.overtime_hours,
            "regular_pay": round_money(totals.regular_pay),
            "overtime_pay": round_money(totals.overtime_pay),
            "total_pay": round_money(totals.total_pay),
        }

    # -- report views ----------------------------------------------------

    def build_payroll_report(self, *, start: date, end: date, filters: Optional[ReportFilters] = None) -> PayrollReport:
        """Detail view: one row per attendance entry, newest first, with grand totals."""

        period = self._period(start, end)
        lines, employees = self._compute(period, filters or ReportFilters())
        names = self._jobsite_names()

        rows = [self._line_row(line, employees.get(line.entry.employee_id), names.get(line.entry.jobsite_id, "")) for line in lines]
        logger.info("payroll report %s..%s: %d rows", period.start, period.end, len(rows))
        return PayrollReport(rows=rows, totals=AggregateTotals.from_lines(lines), warnings=self._warning_rows(lines))

    def build_employee_summary(self, *, start: date, end: date, filters: Optional[ReportFilters] = None) -> list[dict]:
        """One row per employee over the range, highest total pay first."""

        period = self._period(start, end)
        lines, employees = self._compute(period, filters or ReportFilters())

        summary = []
        for employee_id, totals in aggregate(lines, grouping.by_employee).items():
            employee = employees.get(employee_id)
            row = {
                "employee_id": employee_id,
                "employee_name": employee.full_name if employee else "",
                "period_start": period.start.strftime("%Y-%m-%d"),
                "period_end": period.end.strftime("%Y-%m-%d"),
                "total_hours_display": format_hour_minute(totals.total_hours),
            }
            row.update(self._totals_row(totals))
            summary.append(row)

        summary.sort(key=lambda x: x["total_pay"], reverse=True)
        logger.info("employee summary %s..%s: %d employees", period.start, period.end, len(summary))
        return summary

    def build_period_summary(
        self,
        *,
        start: date,
        end: date,
        granularity: Granularity = Granularity.WEEK,
        filters: Optional[ReportFilters] = None,
    ) -> list[dict]:
        """One row per employee per day/week/month bucket, oldest bucket first."""

        period = self._period(start, end)
        key_fn = grouping.for_granularity(granularity, week_starts_on=self._week_starts_on)
        granularity = Granularity(granularity)
        lines, employees = self._compute(period, filters or ReportFilters())

        rows = []
        for (employee_id, bucket_start), totals in aggregate(lines, key_fn).items():
            if granularity is Granularity.DAY:
                bucket_end = bucket_start
            elif granularity is Granularity.WEEK:
                bucket_end = bucket_start + timedelta(days=6)
            else:
                bucket_end = month_end(bucket_start)

            employee = employees.get(employee_id)
            row = {
                "employee_id": employee_id,
                "employee_name": employee.full_name if employee else "",
                "granularity": granularity.value,
                "period_start": bucket_start.strftime("%Y-%m-%d"),
                "period_end": bucket_end.strftime("%Y-%m-%d"),
            }
            row.update(self._totals_row(totals))
            rows.append(row)

        rows.sort(key=lambda x: (x["period_start"], x["employee_name"]))
        return rows

    def build_employee_report(self, employee_id: Hashable, *, start: date, end: date) -> EmployeeReport:
        period = self._period(start, end)
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id!r} does not exist")

        lines, _ = self._compute(period, ReportFilters(employee_ids=[employee_id]))
        names = self._jobsite_names()
        rows = [self._line_row(line, employee, names.get(line.entry.jobsite_id, "")) for line in lines]
        return EmployeeReport(
            employee=employee,
            totals=AggregateTotals.from_lines(lines),
            rows=rows,
            warnings=self._warning_rows(lines),
        )

    def build_master_summary(self, *, start: date, end: date, filters: Optional[ReportFilters] = None) -> MasterSummary:
        period = self._period(start, end)
        lines, _ = self._compute(period, filters or ReportFilters())
        totals = AggregateTotals.from_lines(lines)
        # Distinct ids: site names can repeat, and unknown employees still worked.
        return MasterSummary(
            total_employees=len({line.entry.employee_id for line in lines}),
            total_jobsites=len({line.entry.jobsite_id for line in lines}),
            total_hours=totals.total_hours,
            total_payroll=round_money(totals.total_pay),
        )

    def current_month_payroll(self, *, today: date) -> Decimal:
        """Total pay for the calendar month containing ``today`` (dashboard card)."""

        lines, _ = self._compute(DateRange(month_start(today), month_end(today)), ReportFilters())
        return round_money(AggregateTotals.from_lines(lines).total_pay)

    def build_dashboard_summary(self, *, today: date) -> DashboardSummary:
        """Headline counts plus this month's payroll.

        Counts come from the full employee and job-site lists, not from
        attendance, so people and sites with no hours still show up.
        """

        employees = self._employees.list_all()
        jobsites = self._jobsites.list_all()
        todays = self._attendance.list_entries(start_date=today, end_date=today)
        summary = DashboardSummary(
            total_employees=len(employees),
            total_pms=sum(1 for e in employees if e.employee_type == EmployeeType.PM),
            total_jobsites=len(jobsites),
            active_jobsites=sum(1 for s in jobsites if s.is_active),
            today_attendance=len(todays),
            total_payroll=self.current_month_payroll(today=today),
        )
        logger.info("dashboard summary %s: %d entries today", today, summary.today_attendance)
        return summary
