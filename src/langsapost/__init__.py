"""LangsaPost back-office package.

Organized by feature modules (users, articles, payroll, ...) with a thin Flask
controller layer on top of service/repository layers.
"""
