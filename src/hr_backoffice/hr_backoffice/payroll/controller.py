from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.salary_service

    @app.route("/api/salaries/calculate", methods=["GET"], endpoint="salary_calculate")
    def calculate():
        result = service.calculate(
            request.args.get("employeeId"),
            request.args.get("month"),
            request.args.get("year"),
        )
        return ok({"data": result.to_dict()})

    @app.route("/api/salaries", methods=["POST"], endpoint="salary_create")
    def create():
        data = json_body()
        record = service.create(
            employee_id=data.get("employeeId"),
            month=data.get("month"),
            year=data.get("year"),
            basic_salary=data.get("basicSalary"),
            allowances=data.get("allowances") or 0,
            deductions=data.get("deductions") or 0,
            late_days=data.get("lateDays") or 0,
            late_deduction=data.get("lateDeduction") or 0,
            notes=data.get("notes"),
        )
        return ok({"data": record.to_dict(), "message": "Salary record created"}, 201)

    @app.route("/api/salaries", methods=["GET"], endpoint="salary_list")
    def list_salaries():
        listing = service.list(
            month=request.args.get("month"),
            year=request.args.get("year"),
            status=request.args.get("status"),
            employee_id=request.args.get("employeeId"),
        )
        return ok(listing.to_dict())

    @app.route("/api/salaries/<int:salary_id>", methods=["PUT"], endpoint="salary_update")
    def update(salary_id: int):
        data = json_body()
        fields = {
            "basicSalary": "basic_salary",
            "allowances": "allowances",
            "deductions": "deductions",
            "lateDays": "late_days",
            "lateDeduction": "late_deduction",
            "notes": "notes",
        }
        changes = {attr: data[key] for key, attr in fields.items() if key in data}
        record = service.update(salary_id, **changes)
        return ok({"data": record.to_dict(), "message": "Salary record updated"})

    @app.route("/api/salaries/<int:salary_id>", methods=["DELETE"], endpoint="salary_delete")
    def delete(salary_id: int):
        service.delete(salary_id)
        return ok({"message": "Salary record deleted"})

    @app.route("/api/salaries/<int:salary_id>/pay", methods=["PUT"], endpoint="salary_pay")
    def pay(salary_id: int):
        data = json_body()
        record = service.pay(
            salary_id,
            payment_account=data.get("paymentAccount"),
            transaction_id=data.get("transactionId"),
            paid_by=data.get("paidBy"),
        )
        return ok({"data": record.to_dict(), "message": "Salary paid"})

    @app.route("/api/salaries/<int:salary_id>/slip", methods=["GET"], endpoint="salary_slip")
    def slip(salary_id: int):
        record = service.get(salary_id)
        employee = container.employees_repo.get_by_id(record.employee_id)
        return ok({"data": record.to_dict(), "employee": employee.to_dict() if employee else None})

    @app.route("/api/salaries/employee/<int:employee_id>/overall", methods=["GET"], endpoint="salary_employee_overall")
    def employee_overall(employee_id: int):
        return ok(service.employee_overall(employee_id))

    @app.route("/api/salaries/overall/stats", methods=["GET"], endpoint="salary_overall_stats")
    def overall_stats():
        return ok({"data": service.overall_stats()})

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    def generate():
        data = json_body()
        result = container.payroll_job.run(month=data.get("month"), year=data.get("year"))
        return ok({"data": result.to_dict()})
