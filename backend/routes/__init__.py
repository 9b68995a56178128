"""
FastAPI routers for all API endpoints.

- health: public liveness check
- ask: product review summary (POST /api/ask)
"""
