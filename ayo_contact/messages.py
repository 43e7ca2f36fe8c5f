# ayo_contact/messages.py
"""
Builds the two emails sent for every contact submission:
the inquiry notification for the business inbox and the auto-reply for the visitor.
"""
from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from ayo_contact.email_sender import OutboundMessage

SITE_DOMAIN = "ayocreativedesigns.com"
AUTO_REPLY_SUBJECT = "Thank you for contacting Ayo Creative Designs"


def nl2br(value):
    """Escapes text and turns each line break into a <br> tag."""
    text = str(escape(value or ""))
    return Markup(text.replace("\r\n", "\n").replace("\n", "<br>"))


_env = Environment(
    loader=PackageLoader("ayo_contact", "templates"),
    autoescape=select_autoescape(["html"]),
)
_env.filters["nl2br"] = nl2br


def render(template_name, **context):
    return _env.get_template(template_name).render(site_domain=SITE_DOMAIN, **context)


def build_owner_notification(submission, sender, business_email):
    return OutboundMessage(
        sender=sender,
        recipient=business_email,
        subject=f"New Project Inquiry from {submission.name}",
        html=render("emails/owner_notification.html", submission=submission),
        reply_to=submission.email,
    )


def build_auto_reply(submission, sender):
    return OutboundMessage(
        sender=sender,
        recipient=submission.email,
        subject=AUTO_REPLY_SUBJECT,
        html=render("emails/auto_reply.html", submission=submission),
    )
