"""Example: drive the service layer directly, without Flask.

Controllers stay thin; the payroll rules live in the services.
"""

import importlib

from config import get_settings_module

from institution_payroll.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    batch = container.payroll_service.fetch_all_employees()
    for summary in batch.summaries:
        print(summary.name, summary.days_present, summary.working_days, summary.net_pay)
    for failure in batch.failures:
        print("failed:", failure.employee_id, failure.reason)


if __name__ == "__main__":
    main()
