"""Example: use the report service directly (no web layer).

Prints last week's per-employee payroll summary.
"""

from datetime import date

from crew_payroll.common.datetime_utils import resolve_period
from crew_payroll.core.enums import ReportPeriod
from crew_payroll.main import create_container


def main():
    container = create_container()
    period = resolve_period(ReportPeriod.LAST_7_DAYS, today=date.today())
    for row in container.payroll_report_service.build_employee_summary(start=period.start, end=period.end):
        print(row["employee_name"], row["total_hours_display"], row["total_days"], row["total_pay"])


if __name__ == "__main__":
    main()
