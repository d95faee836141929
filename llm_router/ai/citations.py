"""Citation helpers shared by the chat adapters."""

import re
from collections.abc import Iterable

from llm_router.models.schemas import Citation

URL_PATTERN = re.compile(r"https?://\S+")
TRAILING_PUNCTUATION = ",.)"


def extract_citations(text: str) -> list[Citation]:
    """Find URL-shaped substrings in free text.

    Best-effort heuristic, not a URL parser: every ``http(s)://`` run up to
    the next whitespace counts, trailing commas, periods and closing
    parentheses are stripped, and repeated URLs are kept as separate entries
    in scan order.
    """
    urls = [match.rstrip(TRAILING_PUNCTUATION) for match in URL_PATTERN.findall(text or "")]
    return citations_from_urls(urls)


def citations_from_urls(urls: Iterable[str]) -> list[Citation]:
    """Wrap URLs as citations titled ``Source 1``, ``Source 2``, ..."""
    return [
        Citation(title=f"Source {index}", url=url)
        for index, url in enumerate(urls, start=1)
    ]
