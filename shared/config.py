# shared/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# --- SERVER ---
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3000"))

# comma separated, "*" allows every origin
CORS_ORIGINS: list[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

# --- STORE ---
DATABASE_PATH: str = os.getenv("DATABASE_PATH", "data.db")

# --- FRONT END ---
STATIC_DIR: str = os.getenv("STATIC_DIR", "public")

# --- LOGGING ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- SCHOOL ---
# Seed order matters: classes are inserted track by track, year 1 to 5.
TRACKS: list[str] = ["Linguistico", "Scienze Umane", "Scientifico"]
YEARS: range = range(1, 6)
