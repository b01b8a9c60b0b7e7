import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Load the demo organizations, users and tasks on startup
AUTO_SEED_DEMO = bool(int(os.getenv("AUTO_SEED_DEMO", "1")))

SUMMARY_API_KEY = os.getenv("SUMMARY_API_KEY")
SUMMARY_API_URL = os.getenv("SUMMARY_API_URL", "https://generativelanguage.googleapis.com/v1beta")
SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "gemini-3-flash-preview")
SUMMARY_TIMEOUT_SECONDS = float(os.getenv("SUMMARY_TIMEOUT_SECONDS", "30"))
