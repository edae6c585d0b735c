"""Default configuration constants for the Mailosaur client."""

from datetime import timedelta

# HTTP settings
DEFAULT_BASE_URL = "https://mailosaur.com/"
DEFAULT_TIMEOUT_MS = 30_000

# Hostname used when generating email addresses for a server
DEFAULT_SMTP_HOST = "mailosaur.net"

# Search polling settings (milliseconds)
DEFAULT_SEARCH_DELAY_MS = 1_000
DEFAULT_GET_TIMEOUT_MS = 10_000

# Lookback window applied by Messages.get when received_after is omitted
DEFAULT_RECEIVED_AFTER_WINDOW = timedelta(hours=1)

# Response header carrying the server-advised poll schedule
DELAY_HEADER = "x-ms-delay"

SERVER_ID_LENGTH = 8

USER_AGENT = "mailosaur-python/1.0.0"
