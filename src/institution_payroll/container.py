from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .calendar_days.mysql_calendar_day_repository import MySQLCalendarDayTypeRepository
from .calendar_days.repository import CalendarDayTypeRepository
from .calendar_days.service import CalendarDayTypeService
from .calendar_view.service import CalendarService
from .core.constants import (
    DEFAULT_OVERTIME_MULTIPLIER,
    DEFAULT_PAYROLL_WORKERS,
    DEFAULT_SALARY_COMPONENTS,
    DEFAULT_STAFF_HOURLY_RATE,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import OvertimeRepository
from .overtime.service import OvertimeService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .payroll.working_days import WorkingDayDeriver


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    calendar_day_service: CalendarDayTypeService
    holiday_service: HolidayService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    working_day_deriver: WorkingDayDeriver
    overtime_service: OvertimeService
    payroll_service: PayrollService
    calendar_service: CalendarService


def wire_services(
    *,
    day_types: CalendarDayTypeRepository,
    holidays: HolidayRepository,
    employees: EmployeeRepository,
    attendance: AttendanceRepository,
    leave: LeaveRepository,
    overtime: OvertimeRepository,
    payroll: PayrollRepository,
    settings: Optional[Mapping[str, Any]] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    settings = settings or {}
    workers = int(settings.get("PAYROLL_WORKERS", DEFAULT_PAYROLL_WORKERS))
    multiplier = float(settings.get("OVERTIME_MULTIPLIER", DEFAULT_OVERTIME_MULTIPLIER))
    hourly_rate = float(settings.get("DEFAULT_STAFF_HOURLY_RATE", DEFAULT_STAFF_HOURLY_RATE))
    components = dict(DEFAULT_SALARY_COMPONENTS)
    components.update(settings.get("SALARY_COMPONENTS") or {})

    calendar_day_service = CalendarDayTypeService(day_types)
    holiday_service = HolidayService(holidays)
    employee_service = EmployeeService(employees)
    attendance_service = AttendanceService(attendance, employee_service)
    leave_service = LeaveService(leave)
    working_day_deriver = WorkingDayDeriver(calendar_day_service)
    overtime_service = OvertimeService(
        overtime,
        employee_service,
        overtime_multiplier=multiplier,
        default_hourly_rate=hourly_rate,
    )
    payroll_service = PayrollService(
        employee_service,
        attendance_service,
        leave_service,
        holiday_service,
        working_day_deriver,
        payroll,
        overtime=overtime_service,
        calculator=StandardPayrollCalculator(default_hourly_rate=hourly_rate),
        max_workers=workers,
        salary_components=components,
        overtime_multiplier=multiplier,
        default_hourly_rate=hourly_rate,
    )
    calendar_service = CalendarService(attendance_service, holiday_service, payroll_service)

    return Container(
        conn=conn,
        calendar_day_service=calendar_day_service,
        holiday_service=holiday_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        working_day_deriver=working_day_deriver,
        overtime_service=overtime_service,
        payroll_service=payroll_service,
        calendar_service=calendar_service,
    )


def build_container(*, db_config: dict, settings: Optional[Mapping[str, Any]] = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_services(
        day_types=MySQLCalendarDayTypeRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        employees=MySQLEmployeeRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        leave=MySQLLeaveRepository(conn),
        overtime=MySQLOvertimeRepository(conn),
        payroll=MySQLPayrollRepository(conn),
        settings=settings,
        conn=conn,
    )
