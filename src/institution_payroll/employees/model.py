from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..core.enums import EmployeeClass


def _num(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class SalaryStructure:
    basic_pay: float
    hra: float
    conveyance_allowance: float
    medical_allowance: float
    special_allowance: float

    @property
    def total(self) -> float:
        return self.basic_pay + self.hra + self.conveyance_allowance + self.medical_allowance + self.special_allowance

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> Optional["SalaryStructure"]:
        """None when nothing usable is stored."""
        if not data:
            return None
        return cls(
            basic_pay=_num(data.get("basic_pay")),
            hra=_num(data.get("hra")),
            conveyance_allowance=_num(data.get("conveyance_allowance")),
            medical_allowance=_num(data.get("medical_allowance")),
            special_allowance=_num(data.get("special_allowance")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class StatutoryInfo:
    pf_applicable: bool = True
    esi_applicable: bool = False
    pt_applicable: bool = True
    pt_state: Optional[str] = None
    pf_number: Optional[str] = None
    uan_number: Optional[str] = None
    esi_number: Optional[str] = None
    pan_number: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> Optional["StatutoryInfo"]:
        if not data:
            return None
        return cls(
            pf_applicable=bool(data.get("pf_applicable", True)),
            esi_applicable=bool(data.get("esi_applicable", False)),
            pt_applicable=bool(data.get("pt_applicable", True)),
            pt_state=data.get("pt_state"),
            pf_number=data.get("pf_number"),
            uan_number=data.get("uan_number"),
            esi_number=data.get("esi_number"),
            pan_number=data.get("pan_number"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Employee:
    """A payroll-eligible person from either ledger.

    employee_id is the user id for both classes. ledger_ref is the key the
    attendance ledger uses: the officer record id for officers, the user id
    for staff.
    """

    employee_id: str
    employee_class: EmployeeClass
    name: str
    ledger_ref: str
    email: Optional[str] = None
    institution_id: Optional[str] = None
    department: Optional[str] = None
    position_name: Optional[str] = None
    designation: Optional[str] = None
    join_date: Optional[date] = None
    annual_salary: Optional[float] = None
    hourly_rate: Optional[float] = None
    overtime_rate_multiplier: Optional[float] = None
    salary_structure: Optional[SalaryStructure] = None
    statutory_info: Optional[StatutoryInfo] = None
    is_ceo: bool = False

    @property
    def is_officer(self) -> bool:
        return self.employee_class is EmployeeClass.OFFICER


@dataclass(frozen=True)
class SalaryDetails:
    employee_id: str
    employee_class: EmployeeClass
    annual_salary: float
    monthly_salary: float
    salary_structure: SalaryStructure
    statutory_info: StatutoryInfo
    designation: Optional[str]
    hourly_rate: float
    overtime_multiplier: float

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_class": self.employee_class.value,
            "annual_salary": self.annual_salary,
            "monthly_salary": self.monthly_salary,
            "salary_structure": self.salary_structure.to_dict(),
            "statutory_info": self.statutory_info.to_dict(),
            "designation": self.designation,
            "hourly_rate": self.hourly_rate,
            "overtime_multiplier": self.overtime_multiplier,
        }
