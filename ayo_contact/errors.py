# ayo_contact/errors.py
from enum import Enum


class ContactError(Exception):
    """Base error for a contact submission. Carries the text shown to the visitor."""

    status_code = 500
    public_message = "Failed to send email. Please try again."

    def __init__(self, reason=None, public_message=None):
        super().__init__(reason or public_message or self.public_message)
        self.reason = reason
        if public_message:
            self.public_message = public_message


class ValidationError(ContactError):
    status_code = 400
    public_message = "Please fill in all required fields"


class ConfigurationError(ContactError):
    public_message = "Email service configuration error. Please try again later."


class ServiceUnavailableError(ConfigurationError):
    public_message = "Email service is not configured. Please try again later."


class DeliveryError(ContactError):
    public_message = "Failed to send email. Please try again."


# --- Errors raised by mail senders ---

class MailerErrorKind(Enum):
    AUTHENTICATION = "authentication"
    INVALID_RECIPIENT = "invalid_recipient"
    BAD_CREDENTIALS = "bad_credentials"
    UNKNOWN = "unknown"


class MailerError(Exception):
    """Provider-neutral send failure. Senders translate their own exceptions into one of these."""

    def __init__(self, kind, reason=""):
        super().__init__(f"{kind.value}: {reason}" if reason else kind.value)
        self.kind = kind
        self.reason = reason
