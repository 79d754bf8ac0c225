"""Repositories backed by SQLAlchemy."""
