"""Fixed values shared by credentials, attendance, metrics and the summary client."""

OTP_MIN = 100000
OTP_MAX = 999999

TOP_USERS_LIMIT = 5
DEFAULT_HOURS_WORKED = 8

ORG_SEED_LOG = "[SYS] Initialized"

SUMMARY_FALLBACK = "Unable to generate AI summary at this time. Please check your data manually."
SUMMARY_WORD_LIMIT = 150
DEFAULT_SUMMARY_TIMEOUT_SECONDS = 30.0
