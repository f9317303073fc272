import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./quickjob.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0").lower() in ("1", "true", "yes")

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ✅ OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
CHAT_MAX_TOKENS = int(os.getenv("CHAT_MAX_TOKENS", "500"))
CHAT_TEMPERATURE = float(os.getenv("CHAT_TEMPERATURE", "0.7"))
CHAT_RATE_LIMIT_PER_MINUTE = int(os.getenv("CHAT_RATE_LIMIT_PER_MINUTE", "20"))

# ✅ Paystack
PAYSTACK_SECRET_KEY = os.getenv("PAYSTACK_SECRET_KEY")
PAYSTACK_BASE_URL = os.getenv("PAYSTACK_BASE_URL", "https://api.paystack.co")
PAYSTACK_CURRENCY = os.getenv("PAYSTACK_CURRENCY", "XOF")

# ✅ Email (Resend)
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
NOTIFICATION_FROM_EMAIL = os.getenv("NOTIFICATION_FROM_EMAIL", "notification@quickjob.ci")

# ✅ Scheduled jobs
CRON_SECRET = os.getenv("CRON_SECRET")

# ✅ Frontend
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:8080")

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
