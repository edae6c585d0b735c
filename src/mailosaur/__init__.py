"""Mailosaur Python client.

A Python client library for Mailosaur - hosted email and SMS testing.
Create throwaway servers, wait for messages sent by the system under test,
inspect links, codes and attachments, and run spam analysis.

Example:
    ```python
    import asyncio
    from mailosaur import MailosaurClient, SearchCriteria

    async def main():
        async with MailosaurClient(api_key="your-api-key") as client:
            criteria = SearchCriteria(sent_to="anything@abcd1234.mailosaur.net")
            message = await client.messages.get("abcd1234", criteria)
            print(f"Received: {message.subject}")
            for link in message.html.links:
                print(link.href)

    asyncio.run(main())
    ```
"""

from .analysis import Analysis
from .client import MailosaurClient
from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_GET_TIMEOUT_MS,
    DEFAULT_SEARCH_DELAY_MS,
    DEFAULT_SMTP_HOST,
    DEFAULT_TIMEOUT_MS,
)
from .errors import (
    HttpError,
    InvalidRequestError,
    MailosaurError,
    NetworkError,
    SearchTimeoutError,
)
from .files import Files
from .messages import Messages
from .servers import Servers
from .types import (
    Attachment,
    ClientConfig,
    Code,
    Image,
    Link,
    Message,
    MessageAddress,
    MessageContent,
    MessageCreateOptions,
    MessageForwardOptions,
    MessageHeader,
    MessageListResult,
    MessageReplyOptions,
    MessageSummary,
    Metadata,
    SearchCriteria,
    SearchMatchOperator,
    Server,
    ServerCreateOptions,
    SpamAnalysisResult,
    SpamAssassinRule,
    SpamFilterResults,
)

__version__ = "1.0.0"

__all__ = [
    # Main classes
    "MailosaurClient",
    "Messages",
    "Servers",
    "Analysis",
    "Files",
    # Constants
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_SMTP_HOST",
    "DEFAULT_SEARCH_DELAY_MS",
    "DEFAULT_GET_TIMEOUT_MS",
    # Configuration
    "ClientConfig",
    # Requests
    "SearchCriteria",
    "SearchMatchOperator",
    "MessageCreateOptions",
    "MessageForwardOptions",
    "MessageReplyOptions",
    "ServerCreateOptions",
    # Data types
    "Attachment",
    "Code",
    "Image",
    "Link",
    "Message",
    "MessageAddress",
    "MessageContent",
    "MessageHeader",
    "MessageListResult",
    "MessageSummary",
    "Metadata",
    "Server",
    "SpamAnalysisResult",
    "SpamAssassinRule",
    "SpamFilterResults",
    # Errors
    "MailosaurError",
    "InvalidRequestError",
    "HttpError",
    "SearchTimeoutError",
    "NetworkError",
    # Version
    "__version__",
]
