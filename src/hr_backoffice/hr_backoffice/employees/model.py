from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..common.money import as_number, to_money
from ..core.enums import EmploymentStatus


@dataclass(frozen=True)
class Employee:
    """Read-only view of an employee as payroll sees it.

    The employee profile itself is owned by the HR records module.
    """

    employee_id: int
    full_name: str
    base_salary: Decimal
    status: EmploymentStatus
    erp_id: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmploymentStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "name": self.full_name,
            "erpId": self.erp_id,
            "baseSalary": as_number(to_money(self.base_salary)),
            "status": self.status.value,
        }
