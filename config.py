import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent

# Database location (SQLite file next to the code unless overridden)
DATABASE_URL = os.getenv(
    "SKILLBRIDGE_DATABASE_URL", f"sqlite:///{BASE_DIR / 'skillbridge.db'}"
)

# Accounts live in "<TABLE_KEY>_users_<SCHEMA_VERSION>".
# Bumping the version starts an empty table; older tables are left as they are.
TABLE_KEY = os.getenv("SKILLBRIDGE_TABLE_KEY", "skillbridge")
SCHEMA_VERSION = int(os.getenv("SKILLBRIDGE_SCHEMA_VERSION", "11"))
ACCOUNTS_TABLE = f"{TABLE_KEY}_users_{SCHEMA_VERSION}"

LOG_LEVEL = os.getenv("SKILLBRIDGE_LOG_LEVEL", "INFO")

# Password hashing configuration (passlib)
PASSWORD_SCHEMES = ["pbkdf2_sha256"]

DEFAULT_ROLE = "student"
MENTOR_ROLE = "mentor"

# Registration rules
MIN_USERNAME_LENGTH = 3
MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 8

# Skill menu offered by the signup form. The store accepts any skill string.
PREDEFINED_SKILLS = [
    "JavaScript",
    "Python",
    "React",
    "Node.js",
    "Machine Learning",
    "Data Science",
    "Cloud Computing",
    "Cybersecurity",
    "DevOps",
]

JOBS_PATH = Path(os.getenv("SKILLBRIDGE_JOBS_PATH", str(BASE_DIR / "data" / "jobs.json")))
