import os
from dotenv import load_dotenv # type: ignore

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")
SUPABASE_JWKS_URL = os.getenv(
    "SUPABASE_JWKS_URL",
    f"{SUPABASE_URL}/auth/v1/jwks" if SUPABASE_URL else None,
)

GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
AI_MAX_REQUESTS_PER_HOUR = int(os.getenv("AI_MAX_REQUESTS_PER_HOUR", "10"))

# Empty means the packaged catalog
COMPONENT_CATALOG_PATH = os.getenv("COMPONENT_CATALOG_PATH")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
