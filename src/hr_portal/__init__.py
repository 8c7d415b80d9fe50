"""HR Portal package.

Organized by feature modules (attendance, leaves, profiles, payroll, ...)
with a thin Flask controller layer over service/repository layers.
"""
