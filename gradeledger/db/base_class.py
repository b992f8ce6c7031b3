# /gradeledger/db/base_class.py

from sqlalchemy.orm import declarative_base

# Every ORM model in `db/models` inherits from this Base.
Base = declarative_base()
