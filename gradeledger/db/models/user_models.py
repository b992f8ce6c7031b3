# /gradeledger/db/models/user_models.py

"""
SQLAlchemy model for the accounts that own student data. Every row in the
student record tables carries the `id` of one of these users.
"""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func

from ..base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
