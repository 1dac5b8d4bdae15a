import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

DEFAULT_OAUTH2_PROVIDERS = {
    "google": {
        "client_id": "",
        "client_secret": "",
        "authorization_uri": "https://accounts.google.com/o/oauth2/v2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "userinfo_uri": "https://openidconnect.googleapis.com/v1/userinfo",
        "scope": "openid email profile",
        "redirect_uri": "http://localhost:8080/login/oauth2/code/google",
    },
    "apple": {
        "client_id": "",
        "client_secret": "",
        "authorization_uri": "https://appleid.apple.com/auth/authorize",
        "token_uri": "https://appleid.apple.com/auth/token",
        "scope": "name email",
        "response_mode": "form_post",
        "redirect_uri": "http://localhost:8080/login/oauth2/code/apple",
    },
}


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenantgram.db")
    API_PORT = data.get("API_PORT", 8080)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    SERVER_NAME = data.get("SERVER_NAME", "localhost:8080")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get(
        "JWT_SECRET", "dGVuYW50Z3JhbS1kZXYtc2lnbmluZy1zZWNyZXQtY2hhbmdlLW1lLWluLXByb2QhIQ=="
    )
    JWT_EXPIRATION_MS = int(data.get("JWT_EXPIRATION_MS", 86400000))
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", True))
    RATE_LIMIT_UNAUTHENTICATED = int(data.get("RATE_LIMIT_UNAUTHENTICATED", 30))
    RATE_LIMIT_AUTHENTICATED = int(data.get("RATE_LIMIT_AUTHENTICATED", 60))
    RATE_LIMIT_ADMIN = int(data.get("RATE_LIMIT_ADMIN", 100))
    RATE_LIMIT_TIME_WINDOW_MINUTES = data.get("RATE_LIMIT_TIME_WINDOW_MINUTES", 1)
    RATE_LIMIT_MAX_KEYS = int(data.get("RATE_LIMIT_MAX_KEYS", 100000))
    RATE_LIMIT_RETENTION_SECONDS = int(data.get("RATE_LIMIT_RETENTION_SECONDS", 3600))
    UPLOAD_PATH = data.get("UPLOAD_PATH", "./uploads")
    MAX_UPLOAD_BYTES = int(data.get("MAX_UPLOAD_BYTES", 10 * 1024 * 1024))
    APP_DEEPLINK = data.get("APP_DEEPLINK", "tenantgram://oauth2")
    SENDGRID_API_KEY = data.get("SENDGRID_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "")
    OAUTH2_PROVIDERS = data.get("OAUTH2_PROVIDERS", DEFAULT_OAUTH2_PROVIDERS)
