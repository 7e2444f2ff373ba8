"""
===============================================================================
Artb Mail Notifications
===============================================================================
Sends operator notifications (pre-registrations, contact messages) through
Gmail SMTP over SSL. Message bodies are HTML; callers are responsible for
escaping user-supplied text before interpolating it.
"""

import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr

from utils.config import DEFAULT_SMTP_HOST, DEFAULT_SMTP_PORT


def single_line(text: str) -> str:
    """Collapse whitespace (including CR/LF) so the value is safe in a header."""
    return " ".join(text.split())


class MailNotifier:
    """
    Notification sender bound to one recipient.

    Args:
        user (str): SMTP login and sender address.
        password (str): SMTP password (Gmail app password).
        recipient (str): Address receiving every notification.
        host (str): SMTP host.
        port (int): SMTP SSL port.
    """

    def __init__(
        self,
        user: str,
        password: str,
        recipient: str,
        host: str = DEFAULT_SMTP_HOST,
        port: int = DEFAULT_SMTP_PORT,
    ):
        self.user = user
        self.recipient = recipient
        self.host = host
        self.port = port
        self._password = password

    def build_message(self, subject: str, html_body: str, sender_name: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((single_line(sender_name), self.user))
        message["To"] = self.recipient
        message["Subject"] = single_line(subject)
        message.set_content(html_body, subtype="html")
        return message

    def send(self, subject: str, html_body: str, sender_name: str) -> EmailMessage:
        message = self.build_message(subject, html_body, sender_name)
        context = ssl.create_default_context()
        with smtplib.SMTP_SSL(self.host, self.port, context=context) as smtp:
            smtp.login(self.user, self._password)
            smtp.send_message(message)
        return message
