from __future__ import annotations

import re

from bs4 import BeautifulSoup


def plain_text(value: str) -> str:
    """Return ``value`` without markup, entities decoded and whitespace collapsed.

    WordPress sends rendered titles (``Trail &#8217;s <em>end</em>``) and
    YouTube titles occasionally carry HTML entities; log lines should show
    what a reader sees on the page.
    """
    if not value:
        return ""
    if "<" not in value and "&" not in value:
        return re.sub(r"\s+", " ", value).strip()
    text = BeautifulSoup(value, "html.parser").get_text()
    return re.sub(r"\s+", " ", text).strip()


def truncate(value: str, limit: int, suffix: str = "...") -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + suffix
