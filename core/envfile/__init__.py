"""
Pixie Env File - Public API
===========================
"""

from core.envfile.editor import (
    ConfigFileEditor,
    plain_value,
    quote_value,
    render_value,
)
from core.envfile.records import (
    NULL_SENTINEL,
    AssignmentLine,
    BlankLine,
    CommentLine,
    EnvDocument,
    RawLine,
    canonical_key,
)

__all__ = [
    "NULL_SENTINEL",
    "AssignmentLine",
    "BlankLine",
    "CommentLine",
    "ConfigFileEditor",
    "EnvDocument",
    "RawLine",
    "canonical_key",
    "plain_value",
    "quote_value",
    "render_value",
]
