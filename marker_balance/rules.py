"""
Fixed balancing rules.

This file exists to keep the sentinel and default pairs in one place.
"""

NO_POSITION = -1  # reported position when the source is balanced

DEFAULT_OPENING = ("(", "[", "{")
DEFAULT_CLOSING = (")", "]", "}")

DEFAULT_MAX_UPLOAD_BYTES = 1024 * 1024
