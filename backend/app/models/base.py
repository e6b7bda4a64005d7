"""
SQLAlchemy declarative base.

All models inherit from Base so Base.metadata knows every table.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
