# ayo_contact/email_sender.py
import smtplib, ssl, logging
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid

import resend
from resend import exceptions as resend_exceptions

from ayo_contact.errors import MailerError, MailerErrorKind

logger = logging.getLogger(__name__)

PLAIN_TEXT_FALLBACK = "This message is best viewed in an email client that supports HTML."


@dataclass(frozen=True)
class OutboundMessage:
    sender: str
    recipient: str
    subject: str
    html: str
    reply_to: str = ""


@dataclass(frozen=True)
class DeliveryReceipt:
    provider: str
    message_id: str


class MailSender:
    """Sends one fully-formed email. Implementations raise MailerError on failure."""

    provider = "none"

    def is_configured(self):
        return False

    def send(self, message):
        raise NotImplementedError


class ResendMailSender(MailSender):
    provider = "resend"

    def __init__(self, api_key):
        self.api_key = api_key

    def is_configured(self):
        return bool(self.api_key)

    def send(self, message):
        if not self.api_key.startswith("re_"):
            raise MailerError(MailerErrorKind.BAD_CREDENTIALS, "API key does not start with 're_'")

        params = {
            "from": message.sender,
            "to": [message.recipient],
            "subject": message.subject,
            "html": message.html,
        }
        if message.reply_to:
            params["reply_to"] = message.reply_to

        # The SDK reads its key from module state
        resend.api_key = self.api_key
        try:
            response = resend.Emails.send(params)
        except resend_exceptions.ResendError as e:
            raise MailerError(classify_resend_error(e), str(e)) from e
        except Exception as e:
            raise MailerError(MailerErrorKind.UNKNOWN, str(e)) from e

        message_id = response.get("id", "") if response else ""
        logger.info(f"Successfully sent email to {message.recipient} (resend id {message_id})")
        return DeliveryReceipt(provider=self.provider, message_id=message_id)


def classify_resend_error(error):
    if isinstance(error, resend_exceptions.InvalidApiKeyError):
        return MailerErrorKind.AUTHENTICATION
    if isinstance(error, resend_exceptions.MissingApiKeyError):
        return MailerErrorKind.BAD_CREDENTIALS
    if isinstance(error, resend_exceptions.ValidationError):
        return MailerErrorKind.INVALID_RECIPIENT
    return MailerErrorKind.UNKNOWN


class SmtpMailSender(MailSender):
    provider = "smtp"

    def __init__(self, username, password, server="smtp.gmail.com", port=587, timeout=10):
        self.username = username
        self.password = password
        self.server = server
        self.port = port
        self.timeout = timeout

    def is_configured(self):
        return bool(self.username and self.password)

    def _build(self, message):
        msg = EmailMessage()
        msg['From'] = message.sender
        msg['To'] = message.recipient
        msg['Subject'] = message.subject
        msg['Message-ID'] = make_msgid()
        if message.reply_to:
            msg['Reply-To'] = message.reply_to
        msg.set_content(PLAIN_TEXT_FALLBACK)
        msg.add_alternative(message.html, subtype='html')
        return msg

    def send(self, message):
        msg = self._build(message)
        try:
            context = ssl.create_default_context()
            with smtplib.SMTP(self.server, self.port, timeout=self.timeout) as server:
                server.starttls(context=context)
                server.login(self.username, self.password)
                server.send_message(msg)
        except smtplib.SMTPAuthenticationError as e:
            raise MailerError(MailerErrorKind.AUTHENTICATION,
                              f"Authentication error with {self.username}. Check App Password.") from e
        except (smtplib.SMTPRecipientsRefused, smtplib.SMTPSenderRefused) as e:
            raise MailerError(MailerErrorKind.INVALID_RECIPIENT, str(e)) from e
        except (smtplib.SMTPException, OSError) as e:
            raise MailerError(MailerErrorKind.UNKNOWN, str(e)) from e

        logger.info(f"Successfully sent email to {message.recipient}")
        return DeliveryReceipt(provider=self.provider, message_id=msg['Message-ID'])


def build_mail_sender(settings):
    """Picks the sender named by MAIL_PROVIDER. Unknown names get an unconfigured sender."""
    if settings.mail_provider == "resend":
        return ResendMailSender(settings.resend_api_key)
    if settings.mail_provider == "smtp":
        return SmtpMailSender(settings.email_user, settings.email_pass,
                              server=settings.smtp_server, port=settings.smtp_port,
                              timeout=settings.smtp_timeout)
    logger.error(f"Unknown MAIL_PROVIDER '{settings.mail_provider}'; email sending is disabled")
    return MailSender()
