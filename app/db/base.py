"""
Declarative base - every ORM model inherits from Base so that
Base.metadata knows about all tables.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
