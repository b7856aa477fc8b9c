"""
REST API

FastAPI application, routers, schemas, and authentication.
"""
