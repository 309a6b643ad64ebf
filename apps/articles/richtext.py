"""
Helpers for Lexical rich-text documents stored on articles and blocks.

A document looks like ``{"root": {"children": [...]}}`` where each node has a
``type`` and either ``children`` or leaf data (``text``, upload ``value``...).
"""

import logging
from collections import deque
from typing import Any

from django.utils.html import conditional_escape, format_html, format_html_join
from django.utils.safestring import mark_safe

logger = logging.getLogger(__name__)

# Nodes that count as content even without any text.
EMBED_NODE_TYPES = frozenset({"upload", "relationship", "block"})

# Lexical text format bit flags.
FORMAT_BOLD = 1
FORMAT_ITALIC = 1 << 1
FORMAT_UNDERLINE = 1 << 3

MAX_RENDER_DEPTH = 64


def _root_children(value: Any):
    if not isinstance(value, dict):
        return None
    root = value.get("root")
    if not isinstance(root, dict) or not isinstance(root.get("children"), list):
        return None
    return root["children"]


def has_rich_text_content(value: Any) -> bool:
    """
    Return True if the document holds any visible content.

    Content is a node with non-whitespace ``text`` or an embedded node
    (upload, relationship or block). The tree is walked breadth-first with a
    worklist so deeply nested input cannot exhaust the stack.
    """
    children = _root_children(value)
    if children is None:
        return False

    queue = deque(children)
    while queue:
        node = queue.popleft()
        if not isinstance(node, dict):
            continue

        text = node.get("text")
        if isinstance(text, str) and text.strip():
            return True

        if node.get("type") in EMBED_NODE_TYPES:
            return True

        if isinstance(node.get("children"), list):
            queue.extend(node["children"])

    return False


# =============================================================================
# HTML rendering (preview only)
# =============================================================================

def _render_text(node):
    html = conditional_escape(node.get("text") or "")
    fmt = node.get("format")
    if isinstance(fmt, int):
        if fmt & FORMAT_UNDERLINE:
            html = format_html("<u>{}</u>", html)
        if fmt & FORMAT_ITALIC:
            html = format_html("<em>{}</em>", html)
        if fmt & FORMAT_BOLD:
            html = format_html("<strong>{}</strong>", html)
    return html


def _render_upload(node):
    value = node.get("value")
    if not isinstance(value, dict) or not isinstance(value.get("url"), str):
        return ""
    return format_html('<img src="{}" alt="{}">', value["url"], value.get("alt") or "")


def _render_children(node, depth):
    children = node.get("children")
    if not isinstance(children, list):
        return ""
    return mark_safe("".join(_render_node(child, depth + 1) for child in children))


def _render_node(node, depth):
    if not isinstance(node, dict):
        return ""
    if depth > MAX_RENDER_DEPTH:
        logger.warning("Rich text nesting deeper than %d levels truncated", MAX_RENDER_DEPTH)
        return ""

    node_type = node.get("type")
    if node_type == "text":
        return _render_text(node)
    if node_type == "linebreak":
        return mark_safe("<br>")
    if node_type == "upload":
        return _render_upload(node)

    inner = _render_children(node, depth)

    if node_type == "paragraph":
        return format_html("<p>{}</p>", inner)
    if node_type == "heading":
        tag = node.get("tag") if node.get("tag") in ("h2", "h3", "h4") else "h2"
        return format_html("<{0}>{1}</{0}>", tag, inner)
    if node_type == "quote":
        return format_html("<blockquote>{}</blockquote>", inner)
    if node_type == "list":
        tag = "ol" if node.get("listType") == "number" or node.get("tag") == "ol" else "ul"
        return format_html("<{0}>{1}</{0}>", tag, inner)
    if node_type == "listitem":
        return format_html("<li>{}</li>", inner)
    if node_type in ("link", "autolink"):
        fields = node.get("fields") if isinstance(node.get("fields"), dict) else {}
        url = fields.get("url") or node.get("url") or ""
        if isinstance(url, str) and url.startswith(("http://", "https://", "/", "mailto:")):
            return format_html('<a href="{}">{}</a>', url, inner)
        return inner

    # Unknown element nodes keep their content.
    return inner


def render_rich_text(value: Any) -> str:
    """Render a Lexical document to safe HTML, or "" when it has no content."""
    if not has_rich_text_content(value):
        return ""
    return format_html_join("", "{}", ((_render_node(child, 1),) for child in _root_children(value)))
