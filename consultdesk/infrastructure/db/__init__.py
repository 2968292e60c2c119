"""
Database module for SQLAlchemy models and configuration.
"""

from .database import Base, engine, SessionLocal, get_db, create_db_engine, SQLAlchemyUnitOfWork
