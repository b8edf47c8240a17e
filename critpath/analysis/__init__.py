"""
Analysis and text rendering of critical path results.
"""

from .critical_path import (
    format_duration,
    format_critical_path,
    calculate_slack,
    print_critical_path_report,
)

__all__ = [
    'format_duration',
    'format_critical_path',
    'calculate_slack',
    'print_critical_path_report',
]
