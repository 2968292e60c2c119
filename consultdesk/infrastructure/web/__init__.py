"""FastAPI web layer: routers, middleware and dependencies."""
