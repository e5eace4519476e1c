"""Users API FastAPI application."""
