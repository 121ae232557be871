"""
Daily delivery report.
"""

from .generator import ReportGenerator

__all__ = ["ReportGenerator"]
