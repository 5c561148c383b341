"""Payroll System package.

This package is organized by feature modules (leave, payroll, payslip, ...)
with a thin Flask controller layer and SOLID service/repository layers.
"""
