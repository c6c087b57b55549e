"""
Named stylesheet groups and the link tags that load them.
"""

from __future__ import annotations

import html
from typing import Dict, Iterable, List, Mapping, Optional

LINK_TEMPLATE = '<link href="{href}" media="screen" rel="stylesheet" type="text/css">'


class StylesheetExpansions:
    """
    Registry mapping an expansion name to the stylesheets it stands for.

    Names that are not registered are treated as literal stylesheet paths.
    """

    def __init__(self, expansions: Optional[Mapping[str, Iterable[str]]] = None) -> None:
        self._expansions: Dict[str, List[str]] = {}
        for name, sources in (expansions or {}).items():
            self.register(name, sources)

    def register(self, name: str, sources: Iterable[str]) -> None:
        key = name.strip()
        if not key:
            raise ValueError("Expansion name must not be empty.")
        self._expansions[key] = [str(source) for source in sources]

    def names(self) -> List[str]:
        return sorted(self._expansions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._expansions

    def expand(self, *names: str) -> List[str]:
        """
        Resolve names into stylesheet hrefs, appending ``.css`` where it is missing.

        Duplicates are dropped while keeping first-seen order.
        """
        hrefs: List[str] = []
        for raw in names:
            name = raw.strip()
            for source in self._expansions.get(name, [name]):
                href = source if source.endswith(".css") else f"{source}.css"
                if href not in hrefs:
                    hrefs.append(href)
        return hrefs

    def link_tags(self, *names: str) -> str:
        return "\n".join(LINK_TEMPLATE.format(href=html.escape(href, quote=True)) for href in self.expand(*names))
