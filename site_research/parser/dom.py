# === FILE: site_research/parser/dom.py ===
"""DOM access for the extractor and the link filter.

:class:`PageHandle` is the capability both of them depend on; they never
touch a browser API directly. :class:`SoupPage` implements it over a
BeautifulSoup parse of HTML markup. The page session adapter builds one
from the rendered DOM of a loaded tab, and tests build one from a literal
string, so extraction logic runs the same way in both cases.

CSS selectors are resolved by soupsieve through :meth:`Tag.select`.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("Element", "PageHandle", "SoupPage")

Element = Tag

#: elements whose text is never visible
_INVISIBLE_TAGS = ("script", "style", "noscript", "template", "svg")


@runtime_checkable
class PageHandle(Protocol):
    """Read-only view of a loaded page."""

    @property
    def url(self) -> str: ...

    @property
    def title(self) -> str: ...

    def query_all(self, selector: str) -> List[Element]: ...

    def text(self, element: Element) -> str: ...

    def attr(self, element: Element, name: str) -> Optional[str]: ...

    def body_text(self) -> str: ...

    def next_sibling(self, element: Element) -> Optional[Element]: ...

    def parent(self, element: Element) -> Optional[Element]: ...


class SoupPage:
    """:class:`PageHandle` backed by a BeautifulSoup document."""

    def __init__(self, html: str, url: str = "") -> None:
        self._url = url
        self._soup = BeautifulSoup(html or "", "html.parser")
        for element in self._soup(list(_INVISIBLE_TAGS)):
            element.decompose()

    @property
    def url(self) -> str:
        return self._url

    @property
    def title(self) -> str:
        tag = self._soup.find("title")
        return tag.get_text(" ", strip=True) if tag else ""

    def query_all(self, selector: str) -> List[Element]:
        return [el for el in self._soup.select(selector) if isinstance(el, Tag)]

    def text(self, element: Element) -> str:
        return element.get_text(" ", strip=True)

    def attr(self, element: Element, name: str) -> Optional[str]:
        value = element.get(name)
        if value is None:
            return None
        # multi-valued attributes such as ``class`` come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def body_text(self) -> str:
        """Visible text of ``<body>``, one line per text block."""
        root = self._soup.body or self._soup
        return root.get_text("\n", strip=True)

    def next_sibling(self, element: Element) -> Optional[Element]:
        return element.find_next_sibling()

    def parent(self, element: Element) -> Optional[Element]:
        parent = element.parent
        if parent is None or parent is self._soup:
            return None
        return parent

    def __repr__(self) -> str:
        return f"SoupPage(url={self._url!r})"
