# /gradeledger/db/base.py

# Central registry of ORM models. Importing them here guarantees that
# `Base.metadata` knows about every table when `create_all` or Alembic runs.

from .base_class import Base

from .models.user_models import User
from .models.student_record_models import Student, AcademicRecord, Course
