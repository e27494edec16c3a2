import os
from dotenv import load_dotenv

# Load .env from project root (same folder as main.py)
load_dotenv()

ENV = os.getenv("ENV", "development")
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

SECRET_KEY = os.getenv("SECRET_KEY", "ayurdiet-dev-secret")
SESSION_SECRET = os.getenv("SESSION_SECRET", SECRET_KEY)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ayurdiet.db")
DATABASE_PATH = os.getenv("DATABASE_PATH", DATABASE_URL.replace("sqlite:///", "", 1) if DATABASE_URL.startswith("sqlite:///") else "ayurdiet.db")

# LLM providers (diet chart generation)
GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")

OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "google/gemma-2-9b-it")
OPENROUTER_SITE = os.getenv("OPENROUTER_SITE", "http://localhost")
OPENROUTER_APP = os.getenv("OPENROUTER_APP", "AyurDiet")

LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "25"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "1200"))

# Compatibility listing
COMPATIBILITY_PAGE_SIZE = int(os.getenv("COMPATIBILITY_PAGE_SIZE", "12"))
