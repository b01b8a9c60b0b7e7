SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_SEED_DEMO = True

# No key: the summary endpoint always answers with the fallback text
SUMMARY_API_KEY = None
SUMMARY_API_URL = "https://generativelanguage.googleapis.com/v1beta"
SUMMARY_MODEL = "gemini-3-flash-preview"
SUMMARY_TIMEOUT_SECONDS = 1.0
