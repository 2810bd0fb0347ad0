"""HR back office package.

Organized by feature modules (attendance, payroll, employees) with a thin
Flask controller layer on top of service/repository layers.
"""
