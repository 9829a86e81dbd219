"""Classroom Records package.

This package is organized by feature modules (students, permissions, attendance,
grades, imports, ...) with a thin Flask controller layer over service/repository
layers. Every write goes through the authorization guard before it reaches a
repository.
"""
