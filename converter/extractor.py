"""Readable text extraction from a rendered page."""
import re
from dataclasses import dataclass
from typing import List, Optional
from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

UNTITLED = "Untitled"
NO_CONTENT = "No content found"

NOISE_SELECTORS = [
    "head", "script", "style", "noscript", "template", "svg", "iframe",
    "nav", "header", "footer", "aside",
    ".ad", ".ads", ".advert", ".advertisement", "[id^='ad-']",
    "[class*='social']", "[class*='share']",
    "[class*='cookie']", "[id*='cookie']",
    "[class*='popup']", "[id*='popup']", "[class*='modal']",
]

# First match wins
CONTENT_ROOT_SELECTORS = [
    "main, [role='main']",
    "article, [role='article']",
    "#content, .content, .post-content, .entry-content, .article-content",
]

# Not valid in XML documents
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


@dataclass
class ExtractedContent:
    """Title and structured text pulled from a page."""
    title: str
    text: str


def extract_content(html: str) -> ExtractedContent:
    """
    Turn rendered HTML into a title and structured plain text.

    Headings are wrapped in blank lines, paragraphs sit on their own line and
    list items become bullet lines, which is the layout the document
    renderers read back.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = _extract_title(soup)
    root = _select_content_root(soup)
    _remove_noise(soup, root)

    parts: List[str] = []
    _walk(root, parts)

    text = CONTROL_CHARS.sub("", "".join(parts))
    text = re.sub(r"\n{3,}", "\n\n", text).strip()
    return ExtractedContent(title=title, text=text or NO_CONTENT)


def _extract_title(soup: BeautifulSoup) -> str:
    """Page title, then the first h1, then a placeholder."""
    title_tag = soup.find("title")
    if title_tag:
        title = _normalize(title_tag.get_text())
        if title:
            return title

    h1 = soup.find("h1")
    if h1:
        heading = _normalize(h1.get_text())
        if heading:
            return heading

    return UNTITLED


def _select_content_root(soup: BeautifulSoup) -> Tag:
    for selector in CONTENT_ROOT_SELECTORS:
        element = soup.select_one(selector)
        if element:
            return element
    return soup.body or soup


def _remove_noise(soup: BeautifulSoup, root: Tag) -> None:
    """
    Decompose noise elements, keeping the content root and everything that
    encloses it. Class substring matches such as ``modal`` also hit state
    classes like ``body.modal-open``, which must not take the page with them.
    """
    kept = {id(root)} | {id(parent) for parent in root.parents}

    for selector in NOISE_SELECTORS:
        for element in soup.select(selector):
            if element.decomposed or id(element) in kept or element.name in ("html", "body"):
                continue
            element.decompose()


def _walk(node: Tag, parts: List[str]) -> None:
    for child in node.children:
        if isinstance(child, SKIPPED_STRINGS):
            continue

        if isinstance(child, NavigableString):
            text = child.strip()
            if text:
                parts.append(text + " ")
            continue

        if not isinstance(child, Tag):
            continue

        if child.name in HEADING_TAGS:
            text = _normalize(child.get_text())
            if text:
                parts.append(f"\n\n{text}\n\n")
        elif child.name == "p":
            text = _normalize(child.get_text())
            if text:
                parts.append(f"\n{text}\n")
        elif child.name == "li":
            text = _normalize(child.get_text())
            if text:
                parts.append(f"\n• {text}\n")
        else:
            _walk(child, parts)


def _normalize(text: Optional[str]) -> str:
    """Collapse internal whitespace runs to single spaces."""
    return " ".join(CONTROL_CHARS.sub("", text or "").split())
