"""
Email notifications for failed submissions.
"""

import traceback

from msgraph.generated.models.body_type import BodyType
from msgraph.generated.models.email_address import EmailAddress
from msgraph.generated.models.item_body import ItemBody
from msgraph.generated.models.message import Message
from msgraph.generated.models.recipient import Recipient
from msgraph.generated.users.item.send_mail.send_mail_post_request_body import (
    SendMailPostRequestBody,
)

from core.config import ERROR_EMAIL, FROM_EMAIL
from core.graph_client import get_graph_client
from models.events import Response


def format_error_body(error: Exception, responses: list[Response]) -> str:
    """Describe the failed submission and the traceback."""
    lines = [
        "An error occurred while adding your day to the GET Bus calendar.",
        "",
        "Form responses:",
    ]
    for index, response in enumerate(responses, start=1):
        lines.append(f"  {index}. {response}")
    lines.extend(["", f"Error: {error}", "", traceback.format_exc()])
    return "\n".join(lines)


async def send_error_email(error: Exception, responses: list[Response]):
    """
    Send error notification email.

    Never raises, so the submission error stays the one reported.
    """
    subject = "GET Bus Event Maker - Submission Error"

    message = Message(
        subject=subject,
        body=ItemBody(content_type=BodyType.Text, content=format_error_body(error, responses)),
        to_recipients=[Recipient(email_address=EmailAddress(address=ERROR_EMAIL))],
    )

    request_body = SendMailPostRequestBody(message=message, save_to_sent_items=True)

    try:
        graph = get_graph_client()
        await graph.users.by_user_id(FROM_EMAIL).send_mail.post(request_body)
        print(f"Sent error email to {ERROR_EMAIL}")
    except Exception as e:
        print(f"Failed to send error email: {e}")
