"""Presentation layer: FastAPI routers, dependencies and middleware."""
