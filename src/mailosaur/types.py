"""Type definitions for the Mailosaur client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .constants import DEFAULT_BASE_URL, DEFAULT_SMTP_HOST, DEFAULT_TIMEOUT_MS


class SearchMatchOperator(str, Enum):
    """How multiple search criteria are combined."""

    ALL = "ALL"
    ANY = "ANY"


@dataclass
class ClientConfig:
    """Configuration for MailosaurClient.

    Attributes:
        api_key: API key for authentication.
        base_url: Base URL for the API server.
        timeout: HTTP request timeout in milliseconds.
        smtp_host: Hostname used when generating server email addresses.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT_MS
    smtp_host: str = DEFAULT_SMTP_HOST


@dataclass
class SearchCriteria:
    """Criteria used to find messages.

    At least one of sent_from, sent_to, subject or body must be set.

    Attributes:
        sent_from: Match messages sent from this email address or phone number.
        sent_to: Match messages sent to this email address or phone number.
        subject: Match messages with a subject containing this text.
        body: Match messages with a body containing this text.
        match: Whether all or any of the criteria must match (default: ALL).
    """

    sent_from: str | None = None
    sent_to: str | None = None
    subject: str | None = None
    body: str | None = None
    match: SearchMatchOperator = SearchMatchOperator.ALL

    def has_content(self) -> bool:
        """Return True if at least one matching field is set."""
        return any(
            value is not None for value in (self.sent_from, self.sent_to, self.subject, self.body)
        )


@dataclass(frozen=True)
class MessageAddress:
    """Sender or recipient of a message.

    Attributes:
        name: Display name, if any.
        email: Email address (email messages).
        phone: Phone number (SMS messages).
    """

    name: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class Link:
    """Hyperlink found in message content."""

    href: str | None = None
    text: str | None = None


@dataclass(frozen=True)
class Code:
    """Verification code found in message content."""

    value: str


@dataclass(frozen=True)
class Image:
    """Image found in HTML message content."""

    src: str | None = None
    alt: str | None = None


@dataclass(frozen=True)
class MessageContent:
    """HTML or plain text content of a message.

    Attributes:
        body: The raw content.
        links: Links extracted by the service.
        codes: Verification codes extracted by the service.
        images: Images (HTML content only).
    """

    body: str | None = None
    links: list[Link] = field(default_factory=list)
    codes: list[Code] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)


@dataclass(frozen=True)
class Attachment:
    """Message attachment.

    Used both when reading messages and when attaching files to
    create, forward or reply requests (content is then base64 encoded).

    Attributes:
        id: Attachment identifier (set by the service).
        content_type: MIME content type.
        file_name: Attachment filename.
        content: Base64-encoded content (requests only).
        content_id: Content ID for inline attachments.
        length: Size in bytes.
        url: Download URL.
    """

    id: str | None = None
    content_type: str | None = None
    file_name: str | None = None
    content: str | None = None
    content_id: str | None = None
    length: int | None = None
    url: str | None = None


@dataclass(frozen=True)
class MessageHeader:
    """A single message header."""

    field: str
    value: str


@dataclass(frozen=True)
class Metadata:
    """Further metadata related to a message.

    Attributes:
        headers: Message headers, in the order received.
        ehlo: The EHLO/HELO name sent by the delivering server.
        mail_from: The SMTP envelope MAIL FROM.
        rcpt_to: The SMTP envelope recipients.
    """

    headers: list[MessageHeader] = field(default_factory=list)
    ehlo: str | None = None
    mail_from: str | None = None
    rcpt_to: list[MessageAddress] = field(default_factory=list)


@dataclass(frozen=True)
class Message:
    """A retrieved email or SMS message.

    Attributes:
        id: Unique message identifier.
        type: Message type ('Email' or 'SMS').
        sender: Sender addresses.
        to: Recipient addresses.
        cc: Carbon-copied addresses.
        bcc: Blind carbon-copied addresses.
        received: When the message was received.
        subject: Message subject.
        html: HTML content, with extracted links, codes and images.
        text: Plain text content, with extracted links and codes.
        attachments: Message attachments.
        metadata: Headers and SMTP envelope details.
        server: Identifier of the server holding the message.
    """

    id: str
    type: str | None = None
    sender: list[MessageAddress] = field(default_factory=list)
    to: list[MessageAddress] = field(default_factory=list)
    cc: list[MessageAddress] = field(default_factory=list)
    bcc: list[MessageAddress] = field(default_factory=list)
    received: datetime | None = None
    subject: str | None = None
    html: MessageContent | None = None
    text: MessageContent | None = None
    attachments: list[Attachment] = field(default_factory=list)
    metadata: Metadata | None = None
    server: str | None = None


@dataclass(frozen=True)
class MessageSummary:
    """Summary form of a message, as returned by list and search.

    Attributes:
        id: Unique message identifier.
        type: Message type ('Email' or 'SMS').
        sender: Sender addresses.
        to: Recipient addresses.
        cc: Carbon-copied addresses.
        bcc: Blind carbon-copied addresses.
        received: When the message was received.
        subject: Message subject.
        summary: Short preview of the message content.
        attachments: Number of attachments.
        server: Identifier of the server holding the message.
    """

    id: str
    type: str | None = None
    sender: list[MessageAddress] = field(default_factory=list)
    to: list[MessageAddress] = field(default_factory=list)
    cc: list[MessageAddress] = field(default_factory=list)
    bcc: list[MessageAddress] = field(default_factory=list)
    received: datetime | None = None
    subject: str | None = None
    summary: str | None = None
    attachments: int = 0
    server: str | None = None


@dataclass(frozen=True)
class MessageListResult:
    """A page of message summaries.

    Attributes:
        items: Summaries, most recently received first.
        page: Page number requested, if any.
        items_per_page: Page size requested, if any.
    """

    items: list[MessageSummary] = field(default_factory=list)
    page: int | None = None
    items_per_page: int | None = None


@dataclass
class MessageCreateOptions:
    """Options for creating (and optionally sending) a new message.

    Attributes:
        to: Recipient email address (must be a verified address when sending).
        cc: Carbon-copy recipient email address.
        send: If True, the message is sent immediately.
        subject: Message subject.
        text: Plain text body.
        html: HTML body.
        attachments: Files to attach.
    """

    to: str | None = None
    cc: str | None = None
    send: bool | None = None
    subject: str | None = None
    text: str | None = None
    html: str | None = None
    attachments: list[Attachment] | None = None


@dataclass
class MessageForwardOptions:
    """Options for forwarding a message.

    Attributes:
        to: Recipient email address (must be a verified address).
        cc: Carbon-copy recipient email address.
        text: Plain text to prepend to the forwarded content.
        html: HTML to prepend to the forwarded content.
    """

    to: str
    cc: str | None = None
    text: str | None = None
    html: str | None = None


@dataclass
class MessageReplyOptions:
    """Options for replying to a message.

    Attributes:
        cc: Carbon-copy recipient email address.
        text: Plain text reply body.
        html: HTML reply body.
        attachments: Files to attach.
    """

    cc: str | None = None
    text: str | None = None
    html: str | None = None
    attachments: list[Attachment] | None = None


@dataclass
class Server:
    """A Mailosaur server (a namespace of messages).

    Attributes:
        id: 8-character server identifier.
        name: Human-readable name.
        users: Users with access to the server.
        messages: Number of messages currently held.
    """

    id: str
    name: str | None = None
    users: list[str] = field(default_factory=list)
    messages: int = 0


@dataclass
class ServerCreateOptions:
    """Options for creating a server."""

    name: str


@dataclass(frozen=True)
class SpamAssassinRule:
    """A SpamAssassin rule triggered during spam analysis.

    Attributes:
        score: Score contribution of this rule.
        rule: Rule identifier.
        description: Human-readable description of the rule.
    """

    score: float
    rule: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SpamFilterResults:
    """Results from each spam filter."""

    spam_assassin: list[SpamAssassinRule] = field(default_factory=list)


@dataclass(frozen=True)
class SpamAnalysisResult:
    """Result of spam analysis for a message.

    Attributes:
        spam_filter_results: Per-filter results.
        score: Overall spam score.
    """

    spam_filter_results: SpamFilterResults
    score: float = 0.0
