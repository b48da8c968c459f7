# demokrat/config.py
# Central place for settings and constants
import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "../.env"))

# --- Security & JWT Config ---
# In production, use secure, environment-variable-based secrets
SECRET_KEY = os.getenv("SECRET_KEY", "a_very_secret_key_for_dev_only")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ADMIN_TOKEN_EXPIRE_MINUTES = int(os.getenv("ADMIN_TOKEN_EXPIRE_MINUTES", "60"))
VOTER_TOKEN_EXPIRE_MINUTES = int(os.getenv("VOTER_TOKEN_EXPIRE_MINUTES", "30"))

# --- Bootstrap administrator (used when the identity is not in the admins collection) ---
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
ADMIN_PRIVILEGES = os.getenv("ADMIN_PRIVILEGES", "superadmin")

# --- Database Config ---
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB = os.getenv("MONGO_DB", "demokrat")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

ADMINS_COLLECTION_NAME = "admins"
VOTERS_COLLECTION_NAME = "voters"
ELECTIONS_COLLECTION_NAME = "elections"
CANDIDATES_COLLECTION_NAME = "candidates"
BALLOTS_COLLECTION_NAME = "ballots"
COUNTERS_COLLECTION_NAME = "counters"
ATTENDANCE_COLLECTION_NAME = "attendance"

# "mongo" shares the admin session version through the store,
# "memory" keeps it in this process only
SESSION_COUNTER_BACKEND = os.getenv("SESSION_COUNTER_BACKEND", "mongo")

# --- HTTP ---
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
