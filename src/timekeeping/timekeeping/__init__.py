"""HRMS timekeeping core.

Feature modules (employees, attendance, leaves, payroll) each keep a domain
model, a repository protocol with a MySQL implementation, a service and a
thin Flask controller.
"""
