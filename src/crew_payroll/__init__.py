"""Crew Payroll package.

Payroll derivation for a construction workforce: attendance rows plus per-employee
rate cards go in, per-entry payroll lines and report aggregates come out. Organized by
feature modules (attendance, employees, jobsites, payroll) over a thin MySQL
repository layer.
"""
