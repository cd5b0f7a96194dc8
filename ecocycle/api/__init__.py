"""
HTTP API: FastAPI application, dependencies and routers.
"""
