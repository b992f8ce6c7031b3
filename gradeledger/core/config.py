# /gradeledger/core/config.py

"""
Central configuration for the GradeLedger backend.

Every setting is read once from the environment (a local `.env` file is
loaded first, if present). Modules import the constants they need from here
instead of calling `os.getenv` themselves.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# --- Remote Store ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./gradeledger.db")

# --- Local Persistence Layers (Reconciliation Store) ---
LOCAL_CACHE_DIR = os.getenv("LOCAL_CACHE_DIR", "./.gradeledger_cache")

# --- Identity / Session Tokens ---
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "gradeledger-dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Report Letterhead ---
INSTITUTION_NAME = os.getenv("INSTITUTION_NAME", "Apex University of Liberia (AUL)")
INSTITUTION_COLLEGE = os.getenv("INSTITUTION_COLLEGE", "College of Education & Liberal Art")
INSTITUTION_ADDRESS = os.getenv(
    "INSTITUTION_ADDRESS",
    "72nd S.K.D. Boulevard, Paynesville City, Montserrado County, Liberia",
)
INSTITUTION_PHONE = os.getenv("INSTITUTION_PHONE", "Tel: (+231) 771596881/888993477")
REGISTRAR_TITLE = os.getenv("REGISTRAR_TITLE", "Dean of Admissions, Records & Registration")
