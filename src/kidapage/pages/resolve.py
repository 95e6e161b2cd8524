"""Candidate template names for a request path.

Follows the usual static-site convention::

    /about  ->  pages/about.html, pages/about/index.html
    /       ->  pages/index.html

Everything here is pure: no I/O, no registry access. The request path is
taken as already normalized by the server; no URL-decoding or ``..``
filtering happens here.
"""

from collections.abc import Container, Sequence
from typing import Literal

type Precedence = Literal["index", "file"]


def normalize_prefix(prefix: str) -> str:
    """Strip leading and trailing slashes from a template prefix."""
    return prefix.strip("/")


def template_candidates(path: str, prefix: str) -> list[str]:
    """Return the template names to try for *path*, in scan order.

    *path* has its trailing slash trimmed by the caller and keeps its
    leading slash, so ``"/about"`` with prefix ``"pages"`` yields
    ``["pages/about.html", "pages/about/index.html"]``. The empty path
    (site root) yields ``["pages/index.html"]``.
    """
    if path:
        return [f"{prefix}{path}.html", f"{prefix}{path}/index.html"]
    return [f"{prefix}/index.html"]


def select_template(
    candidates: Sequence[str],
    registry: Container[str],
    *,
    precedence: Precedence = "index",
) -> str | None:
    """Pick the registered candidate to render, or ``None``.

    With ``precedence="index"`` every candidate is checked and the last
    registered one wins, so ``about/index.html`` beats ``about.html``.
    With ``precedence="file"`` the first registered candidate wins.
    """
    matched: str | None = None
    for candidate in candidates:
        if candidate in registry:
            if precedence == "file":
                return candidate
            matched = candidate
    return matched
