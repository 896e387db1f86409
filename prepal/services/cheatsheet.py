"""
Rendu du texte "cheat sheet" / mnémoniques en sections structurées.

    {Titre}
    [Sous-thème]
    - point

Les sections sont séparées par une ligne vide.
"""
import html
import re
from typing import List

from prepal.models.cheatsheet import CheatsheetSection, CheatsheetSubsection

_BULLET_MARKER_RE = re.compile(r"^-\s*")
_TITLE_RE = re.compile(r"^\{(.*)\}$")
_SUBTOPIC_RE = re.compile(r"^\[(.*)\]$")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_RE = re.compile(r"\*(.+?)\*")


def apply_emphasis(text: str) -> str:
    """**gras** -> <strong>, *italique* -> <em> (texte échappé au préalable)."""
    out = html.escape(text, quote=False)
    out = _BOLD_RE.sub(r"<strong>\1</strong>", out)
    out = _ITALIC_RE.sub(r"<em>\1</em>", out)
    return out


def _current_subsection(section: CheatsheetSection) -> CheatsheetSubsection:
    if not section.subsections:
        section.subsections.append(CheatsheetSubsection())
    return section.subsections[-1]


def _is_empty(section: CheatsheetSection) -> bool:
    return section.title is None and not section.subsections


def render_cheatsheet(raw: str, emphasis: bool = False) -> List[CheatsheetSection]:
    sections: List[CheatsheetSection] = []
    if not raw:
        return sections

    for block in raw.split("\n\n"):
        if not block.strip():
            continue

        section = CheatsheetSection()
        for line in block.split("\n"):
            if not line.strip():
                continue
            cleaned = _BULLET_MARKER_RE.sub("", line.strip(), count=1).strip()

            title = _TITLE_RE.match(cleaned)
            if title:
                # un second titre dans le même bloc ouvre une nouvelle section
                if not _is_empty(section):
                    sections.append(section)
                    section = CheatsheetSection()
                section.title = title.group(1).strip()
                continue

            subtopic = _SUBTOPIC_RE.match(cleaned)
            if subtopic:
                section.subsections.append(CheatsheetSubsection(subtitle=subtopic.group(1).strip()))
                continue

            if not cleaned:
                continue
            bullet = apply_emphasis(cleaned) if emphasis else cleaned
            _current_subsection(section).bullets.append(bullet)

        if not _is_empty(section):
            sections.append(section)

    return sections
