"""
Mail templates - Renders domain mail variants to subject and bodies.
"""

from dataclasses import dataclass
from html import escape

from src.domain.mail import Mail, VerifyUserEmail


@dataclass(frozen=True)
class RenderedMail:
    template: str
    subject: str
    text: str
    html: str


_VERIFY_EMAIL_TEXT = """\
Welcome!

Please confirm your email address by opening the link below:

{url}

If you did not create an account, you can ignore this message.
"""

_VERIFY_EMAIL_HTML = """\
<p>Welcome!</p>
<p>Please confirm your email address by clicking the link below:</p>
<p><a href="{url}">Verify my email address</a></p>
<p>If you did not create an account, you can ignore this message.</p>
"""


def render(mail: Mail) -> RenderedMail:
    """Render a mail variant. Raises TypeError for unknown variants."""
    if isinstance(mail, VerifyUserEmail):
        variables = mail.variables()
        return RenderedMail(
            template=mail.template,
            subject="Verify your email address",
            text=_VERIFY_EMAIL_TEXT.format(**variables),
            html=_VERIFY_EMAIL_HTML.format(url=escape(variables["url"], quote=True)),
        )
    raise TypeError(f"Unknown mail variant: {type(mail).__name__}")
