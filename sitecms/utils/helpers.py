import secrets
import time
import bleach
from datetime import datetime


def generate_token():
    """Generate a 6-character hex token used to keep storage names unique."""
    return secrets.token_hex(3)


def now_millis():
    return int(time.time() * 1000)


def timestamp_slug():
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def sanitize(text):
    """Sanitize user input to prevent XSS."""
    if text is None:
        return ""
    return bleach.clean(str(text).strip())
