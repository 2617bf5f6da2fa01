import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./clubauthz.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    # Scheduler endpoints are disabled (500) until a secret is configured
    CRON_SECRET = data.get("CRON_SECRET", "")
    GRANT_MAX_DURATION_HOURS = int(data.get("GRANT_MAX_DURATION_HOURS", 720))
    GRANT_WARNING_HOURS = int(data.get("GRANT_WARNING_HOURS", 24))
    AUDIT_RETENTION_DAYS = int(data.get("AUDIT_RETENTION_DAYS", 365))
    AUDIT_WRITE_RETRIES = int(data.get("AUDIT_WRITE_RETRIES", 3))
    AUDIT_RETRY_DELAY_SECONDS = float(data.get("AUDIT_RETRY_DELAY_SECONDS", 0.2))
    CONTEXT_COOKIE_NAME = data.get("CONTEXT_COOKIE_NAME", "clubauthz_context")
