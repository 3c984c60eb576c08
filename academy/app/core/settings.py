import os


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Settings:
    def __init__(self):
        self.app_name = "Academy Admin"
        self.api_version = "1.0.0"
        self.environment = os.getenv("ACADEMY_ENVIRONMENT", "development")
        self.secret_key = os.getenv("ACADEMY_SECRET_KEY", "academy-secret-key-change-in-production")
        self.SECRET_KEY = self.secret_key
        # Seven days, matching the cookie lifetime handed to browsers
        self.access_token_expire_minutes = int(os.getenv("ACADEMY_ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("ACADEMY_DATABASE_URL", "sqlite:///./academy.db")
        self.log_level = os.getenv("ACADEMY_LOG_LEVEL", "INFO")
        self.cors_origins = _split_origins(
            os.getenv("ACADEMY_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
        )
        self.account_email_domain = os.getenv("ACADEMY_ACCOUNT_EMAIL_DOMAIN", "academy.local")
        self.auth_cookie_name = "auth-token"
        self.auth_cookie_secure = self.environment == "production"


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
