"""Constants used across the richtext-tags package."""

from __future__ import annotations

# Markup delimiters
TAG_START = "<"
TAG_END = ">"
CLOSE_TAG_PREFIX = "/"
