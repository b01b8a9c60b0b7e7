"""Workforce Hub package.

This package is organized by feature modules (organizations, users, teams,
tasks, attendance, metrics, ...) with a thin Flask controller layer and
service/repository layers over an in-memory entity store.
"""
