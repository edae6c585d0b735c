"""Model parsing and serialization helpers for the Mailosaur client."""

from __future__ import annotations

from typing import Any

from ..types import (
    Attachment,
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
    Server,
    SpamAnalysisResult,
    SpamAssassinRule,
    SpamFilterResults,
)
from .datetime_utils import parse_iso_timestamp


def parse_addresses(data: list[dict[str, Any]] | None) -> list[MessageAddress]:
    """Parse a list of message addresses.

    Args:
        data: The address list data.

    Returns:
        List of MessageAddress.
    """
    if not data:
        return []
    return [
        MessageAddress(
            name=item.get("name"),
            email=item.get("email"),
            phone=item.get("phone"),
        )
        for item in data
    ]


def parse_content(data: dict[str, Any] | None) -> MessageContent | None:
    """Parse HTML or text message content.

    Args:
        data: The content data.

    Returns:
        MessageContent or None if no data.
    """
    if data is None:
        return None
    return MessageContent(
        body=data.get("body"),
        links=[Link(href=link.get("href"), text=link.get("text")) for link in data.get("links") or []],
        codes=[Code(value=code["value"]) for code in data.get("codes") or []],
        images=[Image(src=image.get("src"), alt=image.get("alt")) for image in data.get("images") or []],
    )


def parse_attachments(data: list[dict[str, Any]] | None) -> list[Attachment]:
    """Parse message attachments.

    Args:
        data: The attachment list data.

    Returns:
        List of Attachment.
    """
    if not data:
        return []
    return [
        Attachment(
            id=item.get("id"),
            content_type=item.get("contentType"),
            file_name=item.get("fileName"),
            content=item.get("content"),
            content_id=item.get("contentId"),
            length=item.get("length"),
            url=item.get("url"),
        )
        for item in data
    ]


def parse_metadata(data: dict[str, Any] | None) -> Metadata | None:
    """Parse message metadata.

    Args:
        data: The metadata data.

    Returns:
        Metadata or None if no data.
    """
    if data is None:
        return None
    return Metadata(
        headers=[
            MessageHeader(field=header["field"], value=header["value"])
            for header in data.get("headers") or []
        ],
        ehlo=data.get("ehlo"),
        mail_from=data.get("mailFrom"),
        rcpt_to=parse_addresses(data.get("rcptTo")),
    )


def parse_message(data: dict[str, Any]) -> Message:
    """Parse a full message.

    Args:
        data: The message data.

    Returns:
        Message instance.
    """
    received = data.get("received")
    return Message(
        id=data["id"],
        type=data.get("type"),
        sender=parse_addresses(data.get("from")),
        to=parse_addresses(data.get("to")),
        cc=parse_addresses(data.get("cc")),
        bcc=parse_addresses(data.get("bcc")),
        received=parse_iso_timestamp(received) if received else None,
        subject=data.get("subject"),
        html=parse_content(data.get("html")),
        text=parse_content(data.get("text")),
        attachments=parse_attachments(data.get("attachments")),
        metadata=parse_metadata(data.get("metadata")),
        server=data.get("server"),
    )


def parse_message_summary(data: dict[str, Any]) -> MessageSummary:
    """Parse a message summary.

    Args:
        data: The summary data.

    Returns:
        MessageSummary instance.
    """
    received = data.get("received")
    return MessageSummary(
        id=data["id"],
        type=data.get("type"),
        sender=parse_addresses(data.get("from")),
        to=parse_addresses(data.get("to")),
        cc=parse_addresses(data.get("cc")),
        bcc=parse_addresses(data.get("bcc")),
        received=parse_iso_timestamp(received) if received else None,
        subject=data.get("subject"),
        summary=data.get("summary"),
        attachments=data.get("attachments") or 0,
        server=data.get("server"),
    )


def parse_message_list_result(
    data: dict[str, Any],
    page: int | None = None,
    items_per_page: int | None = None,
) -> MessageListResult:
    """Parse a list or search response.

    Args:
        data: The response data.
        page: Page number that was requested.
        items_per_page: Page size that was requested.

    Returns:
        MessageListResult instance.
    """
    return MessageListResult(
        items=[parse_message_summary(item) for item in data.get("items") or []],
        page=page,
        items_per_page=items_per_page,
    )


def parse_server(data: dict[str, Any]) -> Server:
    """Parse a server."""
    return Server(
        id=data["id"],
        name=data.get("name"),
        users=list(data.get("users") or []),
        messages=data.get("messages") or 0,
    )


def parse_spam_analysis_result(data: dict[str, Any]) -> SpamAnalysisResult:
    """Parse a spam analysis result.

    Args:
        data: The analysis data.

    Returns:
        SpamAnalysisResult instance.
    """
    filter_results = data.get("spamFilterResults") or {}
    return SpamAnalysisResult(
        spam_filter_results=SpamFilterResults(
            spam_assassin=[
                SpamAssassinRule(
                    score=float(rule.get("score", 0)),
                    rule=rule.get("rule"),
                    description=rule.get("description"),
                )
                for rule in filter_results.get("spamAssassin") or []
            ]
        ),
        score=float(data.get("score", 0)),
    )


def serialize_search_criteria(criteria: SearchCriteria) -> dict[str, Any]:
    """Serialize SearchCriteria to API format."""
    body: dict[str, Any] = {}
    if criteria.sent_from is not None:
        body["sentFrom"] = criteria.sent_from
    if criteria.sent_to is not None:
        body["sentTo"] = criteria.sent_to
    if criteria.subject is not None:
        body["subject"] = criteria.subject
    if criteria.body is not None:
        body["body"] = criteria.body
    body["match"] = criteria.match.value
    return body


def serialize_attachment(attachment: Attachment) -> dict[str, Any]:
    """Serialize an outgoing Attachment to API format."""
    result: dict[str, Any] = {}
    if attachment.file_name is not None:
        result["fileName"] = attachment.file_name
    if attachment.content_type is not None:
        result["contentType"] = attachment.content_type
    if attachment.content is not None:
        result["content"] = attachment.content
    if attachment.content_id is not None:
        result["contentId"] = attachment.content_id
    return result


def serialize_message_options(
    options: MessageCreateOptions | MessageForwardOptions | MessageReplyOptions,
) -> dict[str, Any]:
    """Serialize create, forward or reply options to API format.

    Unset fields are omitted.
    """
    body: dict[str, Any] = {}
    for name in ("to", "cc", "send", "subject", "text", "html"):
        value = getattr(options, name, None)
        if value is not None:
            body[name] = value
    attachments = getattr(options, "attachments", None)
    if attachments is not None:
        body["attachments"] = [serialize_attachment(a) for a in attachments]
    return body
