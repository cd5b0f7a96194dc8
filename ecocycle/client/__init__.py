"""
Python client for the EcoCycle HTTP API.
"""

from ecocycle.client.api_client import EcoCycleClient, error_from_response, should_retry
from ecocycle.client.optimistic_cache import OptimisticCache

__all__ = ["EcoCycleClient", "OptimisticCache", "error_from_response", "should_retry"]
