"""
Performance metrics for localization evaluation.
"""

from .performance import (rmse, mae, position_error, heading_error,
                          compute_all_metrics, print_metrics)

__all__ = [
    'rmse',
    'mae',
    'position_error',
    'heading_error',
    'compute_all_metrics',
    'print_metrics',
]
