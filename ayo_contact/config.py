# ayo_contact/config.py
import os
import logging
from dataclasses import dataclass
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_EMAIL = "ayocoding12@gmail.com"
DEFAULT_PUBLIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "public"))
DEFAULT_RESEND_FROM = "Ayo Creative Designs <onboarding@resend.dev>"
DEFAULT_ALLOWED_ORIGINS = (
    "https://ayocreativedesigns.com",
    "https://www.ayocreativedesigns.com",
    "http://localhost:3000",
)

# Variables reported by the health check and the startup log (set / not set only)
DIAGNOSTIC_VARS = (
    "MAIL_PROVIDER", "RESEND_API_KEY", "EMAIL_USER", "EMAIL_PASS",
    "MAIL_FROM", "BUSINESS_EMAIL", "PORT", "APP_ENV", "NODE_ENV",
)


def _split_origins(raw):
    return tuple(o.strip() for o in raw.split(',') if o.strip())


@dataclass(frozen=True)
class Settings:
    mail_provider: str = "resend"
    resend_api_key: str = ""
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_timeout: float = 10
    email_user: str = ""
    email_pass: str = ""
    mail_from: str = ""
    business_email: str = DEFAULT_BUSINESS_EMAIL
    port: int = 3000
    environment: str = "development"
    allowed_origins: tuple = DEFAULT_ALLOWED_ORIGINS
    public_dir: str = DEFAULT_PUBLIC_DIR

    @property
    def is_production(self):
        return self.environment == "production"

    @property
    def sender_identity(self):
        """The From address. SMTP falls back to the login account, Resend to its shared domain."""
        if self.mail_from:
            return self.mail_from
        if self.mail_provider == "smtp" and self.email_user:
            return self.email_user
        return DEFAULT_RESEND_FROM

    @classmethod
    def from_env(cls, environ=None, dotenv=True):
        """Reads settings once from the process environment (after loading .env)."""
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        def get(name, default=""):
            value = environ.get(name)
            return value.strip() if value and value.strip() else default

        origins = get("ALLOWED_ORIGINS")
        try:
            smtp_port = int(get("SMTP_PORT", "587"))
            smtp_timeout = float(get("SMTP_TIMEOUT", "10"))
            port = int(get("PORT", "3000"))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting in environment: {e}") from e

        return cls(
            mail_provider=get("MAIL_PROVIDER", "resend").lower(),
            resend_api_key=get("RESEND_API_KEY"),
            smtp_server=get("SMTP_SERVER", "smtp.gmail.com"),
            smtp_port=smtp_port,
            smtp_timeout=smtp_timeout,
            email_user=get("EMAIL_USER"),
            email_pass=get("EMAIL_PASS"),
            mail_from=get("MAIL_FROM"),
            business_email=get("BUSINESS_EMAIL", DEFAULT_BUSINESS_EMAIL),
            port=port,
            environment=(get("APP_ENV") or get("NODE_ENV", "development")).lower(),
            allowed_origins=_split_origins(origins) if origins else DEFAULT_ALLOWED_ORIGINS,
            public_dir=get("PUBLIC_DIR", DEFAULT_PUBLIC_DIR),
        )


def describe_environment(environ=None):
    """Returns {VAR: bool} telling which configuration variables are present. Never returns values."""
    if environ is None:
        environ = os.environ
    return {name: bool(environ.get(name, "").strip()) for name in DIAGNOSTIC_VARS}


def log_environment(settings, environ=None):
    diagnostics = describe_environment(environ)
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Mail provider: {settings.mail_provider}")
    for name, present in diagnostics.items():
        logger.info(f"{name + ':':<16} {'set' if present else 'not set'}")
    if settings.mail_provider == "resend" and settings.resend_api_key \
            and not settings.resend_api_key.startswith("re_"):
        logger.warning("RESEND_API_KEY does not look like a Resend key (expected 're_' prefix)")
