"""
HTTP layer for cron-reality-check (requires the ``api`` extra).
"""

from cron_reality.api.router import create_reality_check_router

__all__ = ["create_reality_check_router"]
