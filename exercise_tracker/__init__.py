"""
Exercise tracker API package.

Provides a FastAPI application for recording users and their exercise
logs, backed by an in-memory store or any SQLAlchemy database.
"""
