"""Utility modules for refmark.

Provides:
- text: slugify, escape_html and line-measuring helpers
- logger: get_logger for logging
"""

from refmark.utils.logger import get_logger
from refmark.utils.text import (
    escape_html,
    expand_tabs,
    indent_width,
    is_blank,
    slugify,
    split_lines,
)

__all__ = [
    "escape_html",
    "expand_tabs",
    "get_logger",
    "indent_width",
    "is_blank",
    "slugify",
    "split_lines",
]
