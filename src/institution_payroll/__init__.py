"""Institution Payroll package.

Reconciles attendance ledgers, approved leave, holiday calendars and the
day-type registry into monthly payroll summaries. Organized by feature modules
(calendar_days, holidays, attendance, leave, payroll, overtime, ...) with a thin
Flask controller layer over service/repository layers.
"""
