from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from wikilink_ls.core.markdown import split_frontmatter

# [[target]] / ![[target]]; a link never spans a line break
_RE_WIKILINK = re.compile(r"(!?)\[\[([^\[\]\n]+)\]\]")
# file#section|label, each part optional
_RE_REFERENCE = re.compile(r"^(?P<file>[^#|]*)(?:#(?P<section>[^|]*))?(?:\|(?P<label>.*))?$", re.DOTALL)
_RE_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_RE_INLINE_CODE = re.compile(r"(`+)(?:(?!\1).)+?\1")
_RE_INDENTED = re.compile(r"^(?: {4}|\t)")
_RE_LIST_ITEM = re.compile(r"^ {0,3}(?:[-*+]|\d{1,9}[.)])(?:\s|$)")
_COMMENT_OPEN = "<!--"
_COMMENT_CLOSE = "-->"
# code spans break a link the same way a line break does
_CODE_SPAN = "\n"

@dataclass(frozen=True)
class NoteReference:
    file: Optional[str]
    section: Optional[str] = None
    label: Optional[str] = None
    embed: bool = False

    @classmethod
    def parse(cls, text: str, *, embed: bool = False) -> "NoteReference":
        """
        Parse the inside of a wikilink:
          "Note"                 -> file="Note"
          "Note#Heading|Alias"   -> file="Note", section="Heading", label="Alias"
          " Note | Alias"        -> file="Note", label=" Alias"
          "#Heading"             -> file=None (same-note link)
        A table-escaped pipe ("Note\\|Alias") separates the label too.
        """
        m = _RE_REFERENCE.match(text)
        file = m.group("file")
        section = m.group("section")
        label = m.group("label")
        if file.endswith("\\") and label is not None and section is None:
            file = file[:-1]
        if section is not None and section.endswith("\\") and label is not None:
            section = section[:-1]
        file = file.strip()
        section = section.strip() if section is not None else None
        return cls(
            file=file or None,
            section=section or None,
            label=label or None,
            embed=embed,
        )

def _strip_comments(line: str, in_comment: bool):
    """Remove <!-- ... --> spans from one line; returns (text, still_in_comment)."""
    out: List[str] = []
    rest = line
    while rest:
        if in_comment:
            end = rest.find(_COMMENT_CLOSE)
            if end < 0:
                return "".join(out), True
            rest = rest[end + len(_COMMENT_CLOSE):]
            in_comment = False
            continue
        start = rest.find(_COMMENT_OPEN)
        if start < 0:
            out.append(rest)
            break
        out.append(rest[:start] + _CODE_SPAN)
        rest = rest[start + len(_COMMENT_OPEN):]
        in_comment = True
    return "".join(out), in_comment

def _prose_lines(body: str) -> Iterator[str]:
    """
    Yield body text that can hold links. Left out:
    - fenced code blocks (``` or ~~~)
    - indented code blocks (4 spaces or a tab after a blank line, outside a list)
    - HTML comments, including ones spanning lines
    Inline code spans are replaced by a line break so they split any link around them.
    """
    fence: Optional[str] = None
    in_comment = False
    in_indented = False
    in_list = False
    prev_blank = True

    for line in body.split("\n"):
        blank = line.strip() == ""

        if fence is not None:
            m = _RE_FENCE.match(line)
            # closing fence: same character, at least as long, nothing after it
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence) and line.strip() == m.group(1):
                fence = None
            prev_blank = False
            continue

        if not in_comment:
            if in_indented and (blank or _RE_INDENTED.match(line)):
                continue
            in_indented = False
            if prev_blank and not in_list and not blank and _RE_INDENTED.match(line):
                in_indented = True
                continue

            m = _RE_FENCE.match(line)
            if m:
                fence = m.group(1)
                prev_blank = False
                continue

            if _RE_LIST_ITEM.match(line):
                in_list = True
            elif not blank and not _RE_INDENTED.match(line):
                in_list = False
            prev_blank = blank

        text = _RE_INLINE_CODE.sub(_CODE_SPAN, line) if not in_comment else line
        text, in_comment = _strip_comments(text, in_comment)
        yield text

def iter_wikilinks(content: str) -> Iterator[NoteReference]:
    _, body = split_frontmatter(content)
    for text in _prose_lines(body):
        for m in _RE_WIKILINK.finditer(text):
            yield NoteReference.parse(m.group(2), embed=bool(m.group(1)))

def collect_references(content: str) -> List[str]:
    """
    Raw link targets of every wikilink and embed in the note, in document order.
    Links inside frontmatter, code or HTML comments, and links without a file
    part, are left out.
    """
    return [ref.file for ref in iter_wikilinks(content) if ref.file is not None]
