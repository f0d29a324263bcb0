import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Database configuration
DATABASE_TYPE = os.getenv("DATABASE_TYPE", "memory")  # Options: 'memory', 'json'

# JSON database configuration
JSON_DB_PATH = os.getenv("JSON_DB_PATH")  # Path to JSON database directory

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE_ENABLED = os.getenv("LOG_FILE_ENABLED", "false").lower() == "true"
LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

# Identity of the calling owner, resolved by the upstream auth gateway
OWNER_HEADER = os.getenv("OWNER_HEADER", "X-User-Id")

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")

# Rate Limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "100"))
