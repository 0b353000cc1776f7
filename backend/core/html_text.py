# core/html_text.py
from __future__ import annotations
from typing import List

from bs4 import BeautifulSoup

# Tags that start a new line in the rendered instruction
BLOCK_TAGS = ("div", "p", "li", "tr", "h1", "h2", "h3", "h4", "h5", "h6")
DROP_WITH_CONTENT = ("script", "style")


def html_to_lines(markup: str) -> List[str]:
    """
    Plain-text lines from a Directions `html_instructions` fragment.

    "Turn <b>left</b> onto Main St<br>then continue"
      -> ["Turn left onto Main St", "then continue"]

    Inline tags are dropped and their text kept; entities are decoded; runs of
    whitespace (including &nbsp;) collapse to one space; blank lines go away.
    """
    if not markup:
        return []

    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup.find_all(DROP_WITH_CONTENT):
        tag.decompose()
    for tag in soup.find_all("br"):
        tag.replace_with("\n")
    for tag in soup.find_all(BLOCK_TAGS):
        tag.insert_before("\n")
        tag.insert_after("\n")

    lines: List[str] = []
    for raw in soup.get_text().split("\n"):
        line = " ".join(raw.split())
        if line:
            lines.append(line)
    return lines


def html_to_text(markup: str, separator: str = "\n") -> str:
    return separator.join(html_to_lines(markup))
