# ayo_contact/contact.py
import logging
from dataclasses import dataclass

from ayo_contact.errors import (
    ContactError, ValidationError, ConfigurationError, ServiceUnavailableError,
    DeliveryError, MailerError, MailerErrorKind,
)
from ayo_contact.messages import build_owner_notification, build_auto_reply

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "service", "message")
SINGLE_LINE_FIELDS = ("name", "email", "phone", "service", "budget", "timeline")
SUCCESS_MESSAGE = "Email sent successfully! I will get back to you within 24 hours."


@dataclass(frozen=True)
class Submission:
    name: str = ""
    email: str = ""
    phone: str = ""
    service: str = ""
    budget: str = ""
    timeline: str = ""
    message: str = ""

    @classmethod
    def from_form(cls, data):
        """Builds a Submission from a parsed JSON body or form. Unknown keys are ignored."""
        data = data or {}
        values = {}
        for name in SINGLE_LINE_FIELDS:
            # Collapse whitespace so header fields like the subject stay on one line
            values[name] = " ".join(str(data.get(name) or "").split())
        values["message"] = str(data.get("message") or "").strip()
        return cls(**values)

    def missing_fields(self):
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


@dataclass(frozen=True)
class ContactResult:
    success: bool
    message: str
    status_code: int

    def to_dict(self):
        return {"success": self.success, "message": self.message}


# Maps a sender failure to the error shown to the visitor
_ERRORS_BY_KIND = {
    MailerErrorKind.AUTHENTICATION: (
        ConfigurationError, "Email authentication failed. Please contact the site owner."),
    MailerErrorKind.INVALID_RECIPIENT: (
        ValidationError, "Invalid email address. Please check and try again."),
    MailerErrorKind.BAD_CREDENTIALS: (
        ConfigurationError, "Email service configuration error. Please try again later."),
}


def translate_mailer_error(error):
    """Turns a MailerError into the matching ContactError. Provider-detected errors are always HTTP 500."""
    error_class, public_message = _ERRORS_BY_KIND.get(error.kind, (DeliveryError, None))
    translated = error_class(reason=error.reason or str(error), public_message=public_message)
    translated.status_code = 500
    return translated


class ContactHandler:
    """Validates a submission and sends the owner notification followed by the auto-reply."""

    def __init__(self, settings, mail_sender):
        self.settings = settings
        self.mail_sender = mail_sender

    def handle_submission(self, submission):
        try:
            self._process(submission)
        except ConfigurationError as e:
            logger.error(f"Email configuration problem: {e}")
            return ContactResult(False, e.public_message, e.status_code)
        except ContactError as e:
            log = logger.info if e.status_code == 400 else logger.error
            log(f"Contact submission failed: {e}")
            return ContactResult(False, e.public_message, e.status_code)
        return ContactResult(True, SUCCESS_MESSAGE, 200)

    def _process(self, submission):
        missing = submission.missing_fields()
        if missing:
            raise ValidationError(reason=f"Missing required fields: {', '.join(missing)}")

        if not self.mail_sender.is_configured():
            raise ServiceUnavailableError(
                reason=f"mail provider '{self.mail_sender.provider}' has no credentials")

        sender = self.settings.sender_identity
        owner_message = build_owner_notification(submission, sender, self.settings.business_email)
        self._dispatch(owner_message)

        auto_reply = build_auto_reply(submission, sender)
        try:
            self._dispatch(auto_reply)
        except ContactError:
            logger.warning(
                f"Partial delivery: inquiry from {submission.email} reached "
                f"{owner_message.recipient} but the auto-reply was not sent")
            raise

    def _dispatch(self, message):
        try:
            return self.mail_sender.send(message)
        except MailerError as e:
            raise translate_mailer_error(e) from e
        except Exception as e:
            raise DeliveryError(reason=f"Unexpected error sending to {message.recipient}: {e}") from e
