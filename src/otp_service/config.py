"""OTP Service — configuration loaded from environment."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── App ───────────────────────────────────────────────
    app_name: str = "Noble AFFIS Consult"
    debug: bool = False

    # ── OTP lifecycle ─────────────────────────────────────
    otp_ttl_seconds: int = 600
    sweep_interval_seconds: float = 0  # 0 = lazy expiry only

    # ── Rate limiting (per caller IP) ─────────────────────
    rate_limit_window_seconds: int = 900
    rate_limit_max_requests: int = 5

    # ── Delivery ──────────────────────────────────────────
    delivery_timeout_seconds: float = 10.0

    # ── Twilio (SMS) ──────────────────────────────────────
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""
    twilio_api_base_url: str = "https://api.twilio.com/2010-04-01"

    # ── SMTP (email) ──────────────────────────────────────
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    email_from: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def sender_address(self) -> str:
        """Envelope sender for OTP emails."""
        return self.email_from or self.smtp_username


# Singleton settings instance
settings = Settings()
