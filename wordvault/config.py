import os

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(__file__)
load_dotenv(os.path.join(BASE_DIR, ".env"))

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DB = os.getenv("MONGODB_DB", "wordvault")
# "memory" keeps everything in process; handy for local runs without MongoDB.
WORDVAULT_STORAGE = os.getenv("WORDVAULT_STORAGE", "mongo").strip().lower()

DICTIONARY_API_BASE = os.getenv("DICTIONARY_API_BASE", "https://api.dictionaryapi.dev/api/v2/entries/en")
DICTIONARY_TIMEOUT = float(os.getenv("DICTIONARY_TIMEOUT", "8"))
DICTIONARY_FALLBACK_WORDNET = os.getenv("DICTIONARY_FALLBACK_WORDNET", "1") == "1"

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "20"))

AUDIO_CACHE_DIR = os.getenv("AUDIO_CACHE_DIR", os.path.join(BASE_DIR, ".cache", "audio"))
AUDIO_CACHE_MAX_BYTES = int(os.getenv("AUDIO_CACHE_MAX_BYTES", str(50 * 1024 * 1024)))
AUDIO_CACHE_MAX_AGE = int(os.getenv("AUDIO_CACHE_MAX_AGE", str(7 * 24 * 60 * 60)))

SHARE_INTAKE_TIMEOUT = float(os.getenv("SHARE_INTAKE_TIMEOUT", "10"))

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",")]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
