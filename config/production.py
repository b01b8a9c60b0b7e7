import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_SEED_DEMO = bool(int(os.getenv("AUTO_SEED_DEMO", "0")))

SUMMARY_API_KEY = os.getenv("SUMMARY_API_KEY")
SUMMARY_API_URL = os.getenv("SUMMARY_API_URL", "https://generativelanguage.googleapis.com/v1beta")
SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "gemini-3-flash-preview")
SUMMARY_TIMEOUT_SECONDS = float(os.getenv("SUMMARY_TIMEOUT_SECONDS", "30"))
