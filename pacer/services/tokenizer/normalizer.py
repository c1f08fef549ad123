"""
Text normalization into the in-band marker conventions.

Key behavior:
- Normalizes line endings and whitespace (preserving paragraph boundaries)
- Markdown -> plain text with ``[H<n>]`` heading and ``[CALLOUT:type]`` markers
- Inline Markdown is handled by one regex alternation with explicit precedence
- Pasted text: a line opening with a marker is a block of its own
"""
import re
from dataclasses import dataclass
from typing import Literal

from .constants import ANY_MARKER_PREFIX

# Maximum input size: 10MB / ~10 million characters
MAX_INPUT_SIZE = 10_000_000

SourceTypeLiteral = Literal["paste", "md"]


@dataclass(frozen=True)
class _Block:
    """Internal representation of a text block."""

    kind: Literal["paragraph", "heading", "callout", "list_item", "code"]
    text: str


def normalize_text(
    raw_text: str,
    source_type: SourceTypeLiteral = "paste",
    max_chars: int | None = MAX_INPUT_SIZE,
) -> str:
    """
    Normalize text for segmentation.

    - Handles line endings
    - Separates blocks with exactly one blank line
    - For Markdown: strips formatting and emits heading/callout markers

    Args:
        raw_text: The input text
        source_type: "paste" or "md"
        max_chars: Upper bound on input size, None to disable

    Returns:
        Normalized text, blocks separated by exactly one blank line

    Raises:
        ValueError: If the input exceeds ``max_chars``
    """
    if not raw_text:
        return ""

    if max_chars is not None and len(raw_text) > max_chars:
        raise ValueError(
            f"Input text exceeds maximum size of {max_chars:,} characters "
            f"(got {len(raw_text):,} characters)"
        )

    text = raw_text.replace("\r\n", "\n").replace("\r", "\n")

    if source_type == "md":
        blocks = _markdown_to_blocks(text)
    else:
        blocks = _plain_text_to_blocks(text)

    return _finalize_blocks(blocks)


def _plain_text_to_blocks(text: str) -> list[_Block]:
    """
    Convert plain text into paragraph blocks.

    Paragraphs are separated by blank lines (one or more). Inside a paragraph,
    a line that opens with a heading or callout marker is a block of its own.
    """
    blocks: list[_Block] = []

    for para in re.split(r"\n\s*\n", text):
        lines: list[str] = []
        for line in para.split("\n"):
            if ANY_MARKER_PREFIX.match(line.strip()):
                if lines:
                    blocks.append(_Block(kind="paragraph", text="\n".join(lines)))
                    lines = []
                kind = "callout" if line.strip().startswith("[CALLOUT:") else "heading"
                blocks.append(_Block(kind=kind, text=line))
            else:
                lines.append(line)
        if lines:
            blocks.append(_Block(kind="paragraph", text="\n".join(lines)))

    return [block for block in blocks if block.text.strip()]


# -----------------------------------------------------------------------------
# Block-level lexer
# -----------------------------------------------------------------------------

_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_FRONT_MATTER_RE = re.compile(r"^---\s*$")
_HEADING_RE = re.compile(r"^\s{0,3}(#{1,6})\s+(.+?)\s*#*\s*$")
_CALLOUT_RE = re.compile(r"^\s*>\s*\[!([\w-]+)\][+-]?\s*(.*?)\s*$")
_BLOCKQUOTE_RE = re.compile(r"^\s*(?:>\s?)+")
_LIST_RE = re.compile(r"^\s*([-*+•]|\d+\.)\s+(.+?)\s*$")
_HR_RE = re.compile(r"^\s*(?:-{3,}|\*{3,}|_{3,})\s*$")
_FOOTNOTE_DEF_RE = re.compile(r"^\s*\[\^[^\]]+\]:")
_BACKLINKS_RE = re.compile(r"^\s*(?:#{1,2}\s*Backlinks?\s*$|---\s*Backlinks?\s*---)", re.IGNORECASE)
_COMMENT_OPEN = "<!--"
_COMMENT_CLOSE = "-->"


def _markdown_to_blocks(text: str) -> list[_Block]:
    """
    Convert Markdown into marker-annotated plain-text blocks.

    Line rules, first match wins:
    - YAML front matter at the very top is dropped
    - Fenced code keeps its content verbatim (no inline processing)
    - Multi-line HTML comments, footnote definitions and rules are dropped
    - A Backlinks section ends the document
    - Headings become ``[H<n>]Text`` blocks
    - Callouts (``> [!type] Title``) become ``[CALLOUT:type]Title`` blocks
    - List items become their own blocks and keep their bullet or enumerator
    - Other blockquote markers are stripped and the content kept
    """
    lines = _drop_front_matter(text.split("\n"))
    blocks: list[_Block] = []
    current_para: list[str] = []
    code_lines: list[str] = []

    in_fenced_code = False
    in_comment = False

    def flush_paragraph() -> None:
        nonlocal current_para
        if not current_para:
            return

        clean = strip_markdown_inline(" ".join(current_para))
        if clean:
            blocks.append(_Block(kind="paragraph", text=clean))
        current_para = []

    for line in lines:
        if _FENCE_RE.match(line):
            if in_fenced_code:
                if any(code_line.strip() for code_line in code_lines):
                    blocks.append(_Block(kind="code", text=" ".join(code_lines)))
                code_lines = []
            else:
                flush_paragraph()
            in_fenced_code = not in_fenced_code
            continue

        if in_fenced_code:
            code_lines.append(line)
            continue

        if in_comment:
            if _COMMENT_CLOSE in line:
                in_comment = False
                line = line.split(_COMMENT_CLOSE, 1)[1]
            else:
                continue

        if _COMMENT_OPEN in line and _COMMENT_CLOSE not in line.split(_COMMENT_OPEN, 1)[1]:
            in_comment = True
            line = line.split(_COMMENT_OPEN, 1)[0]

        if _BACKLINKS_RE.match(line):
            break

        if _HR_RE.match(line) or _FOOTNOTE_DEF_RE.match(line):
            flush_paragraph()
            continue

        if not line.strip():
            flush_paragraph()
            continue

        heading_match = _HEADING_RE.match(line)
        if heading_match:
            flush_paragraph()
            level = len(heading_match.group(1))
            heading_text = strip_markdown_inline(heading_match.group(2))
            if heading_text:
                blocks.append(_Block(kind="heading", text=f"[H{level}]{heading_text}"))
            continue

        callout_match = _CALLOUT_RE.match(line)
        if callout_match:
            flush_paragraph()
            kind = callout_match.group(1).lower()
            title = strip_markdown_inline(callout_match.group(2)) or kind.capitalize()
            blocks.append(_Block(kind="callout", text=f"[CALLOUT:{kind}]{title}"))
            continue

        if _BLOCKQUOTE_RE.match(line):
            line = _BLOCKQUOTE_RE.sub("", line, count=1)
            if not line.strip():
                flush_paragraph()
                continue

        list_match = _LIST_RE.match(line)
        if list_match:
            flush_paragraph()
            item_text = strip_markdown_inline(list_match.group(2))
            if item_text:
                blocks.append(_Block(kind="list_item", text=f"{list_match.group(1)} {item_text}"))
            continue

        current_para.append(line)

    if in_fenced_code and any(code_line.strip() for code_line in code_lines):
        blocks.append(_Block(kind="code", text=" ".join(code_lines)))

    flush_paragraph()
    return blocks


def _drop_front_matter(lines: list[str]) -> list[str]:
    """Drop a YAML front matter block when the document opens with one."""
    if not lines or not _FRONT_MATTER_RE.match(lines[0]):
        return lines

    for end, line in enumerate(lines[1:], start=1):
        if _FRONT_MATTER_RE.match(line):
            return lines[end + 1:]

    # Unterminated: treat the opening line as a rule
    return lines


# -----------------------------------------------------------------------------
# Inline lexer
# -----------------------------------------------------------------------------

# Alternation order is precedence order: protected code spans, then media,
# then links, then emphasis, then the bits that are simply dropped.
_INLINE_RE = re.compile(
    r"(?P<code>`(?P<code_body>[^`]+)`)"
    r"|(?P<embed>!\[\[[^\]]*\]\]|!\[[^\]]*\]\([^)]*\))"
    r"|(?P<wikilink>\[\[(?P<wiki_target>[^\]|]+)(?:\|(?P<wiki_alias>[^\]]+))?\]\])"
    r"|(?P<footnote>\[\^[^\]]+\])"
    r"|(?P<link>\[(?P<link_text>[^\]]+)\]\([^)]*\))"
    r"|(?P<emphasis>(?P<delim>\*\*\*|\*\*|~~|==|\*)(?=\S)(?P<emph_body>.+?)(?<=\S)(?P=delim))"
    r"|(?P<underscore>(?<!\w)(?P<udelim>__|_)(?=\S)(?P<under_body>.+?)(?<=\S)(?P=udelim)(?!\w))"
    r"|(?P<comment><!--.*?-->)"
    r"|(?P<html></?[A-Za-z][^>]*>)"
    r"|(?P<tag>(?<!\S)#[A-Za-z0-9_/-]+)"
)


def _replace_inline(match: re.Match) -> str:
    if match.group("code") is not None:
        return match.group("code_body")
    if match.group("wikilink") is not None:
        return match.group("wiki_alias") or match.group("wiki_target")
    if match.group("link") is not None:
        return strip_markdown_inline(match.group("link_text"))
    if match.group("emphasis") is not None:
        return strip_markdown_inline(match.group("emph_body"))
    if match.group("underscore") is not None:
        return strip_markdown_inline(match.group("under_body"))
    # embeds, footnote refs, comments, HTML tags, tags
    return ""


def strip_markdown_inline(text: str) -> str:
    """
    Markdown inline cleanup in one left-to-right pass:
    - Inline code: `code` -> code (contents untouched)
    - Images and embeds: dropped
    - Links: [text](url) -> text, [[link|alias]] -> alias or link
    - Emphasis: ***, **, *, __, _, ~~, == unwrap (nested emphasis too)
    - Footnote references, HTML comments/tags and #tags removed
    """
    text = _INLINE_RE.sub(_replace_inline, text)
    return re.sub(r"[ \t]+", " ", text).strip()


def _normalize_block_whitespace(text: str) -> str:
    """
    Normalize whitespace inside a single block.

    Converts all newlines to spaces and collapses multiple spaces.
    """
    text = text.replace("\n", " ")
    text = re.sub(r"[ \t]+", " ", text)
    return text.strip()


def _finalize_blocks(blocks: list[_Block]) -> str:
    """Normalize each block and join non-empty blocks with one blank line."""
    parts = [_normalize_block_whitespace(block.text) for block in blocks]
    return "\n\n".join(part for part in parts if part)
