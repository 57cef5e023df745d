"""Dashboard module for CLI strategy visualization.

This module provides a terminal-based dashboard for target progress,
capital, diversification, recommendations and open positions.
"""

from src.business.cli.dashboard.renderer import (
    DashboardData,
    DashboardRenderer,
    collect_dashboard_data,
)

__all__ = ["DashboardData", "DashboardRenderer", "collect_dashboard_data"]
