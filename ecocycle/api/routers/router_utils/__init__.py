"""
Shared helpers for routers.
"""

from ecocycle.api.routers.router_utils.error_handling import (
    handle_service_errors,
    register_exception_handlers,
)

__all__ = ["handle_service_errors", "register_exception_handlers"]
