"""Output formatting models."""

import sys

from pydantic import BaseModel


class FormatOptions(BaseModel):
    """Options controlling how requests and responses are rendered."""

    pretty_print: bool = False
    truncate: int | None = None  # Max chars for bodies, None = no truncation
    show_headers: bool = True
    mask_secrets: bool = True  # Hide Authorization, API keys, cookies
    debug: bool = False


def debug_log(message: str, enabled: bool = True) -> None:
    """Print a debug message to stderr if enabled."""
    if enabled:
        print(f"[DEBUG] {message}", file=sys.stderr)
