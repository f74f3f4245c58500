"""
Constraint violation analysis module.

This module provides tools for verifying schedules and explaining unsatisfiable problems.
"""

from .violation_analyzer import ConstraintViolationAnalyzer

__all__ = ["ConstraintViolationAnalyzer"]
