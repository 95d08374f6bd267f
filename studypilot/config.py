import os
from dotenv import load_dotenv

load_dotenv()

# --- Storage ---
# "sql" uses DATABASE_URL through SQLAlchemy, "supabase" talks to PostgREST
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").lower()

# Default to local SQLite
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/studypilot.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Supabase Configuration ---
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

# --- JWT Configuration ---
# Tokens are issued by the identity provider (e.g. Supabase Auth) and only verified here
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "")

# --- Content generation ---
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "lovable").lower()
LLM_API_KEY = os.getenv("LLM_API_KEY", "") or os.getenv("LOVABLE_API_KEY", "")
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "")
LLM_MODEL = os.getenv("LLM_MODEL", "")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# --- Web ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
