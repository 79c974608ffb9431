"""Payroll API - employee records, employment contracts and monthly payroll."""

__version__ = "0.1.0"
