"""Chirp middleware provided by kidapage.

    TemplatePages -- Render templates whose name matches the request path
"""

from kidapage.middleware.pages import ContextBuilder, TemplatePages

__all__ = ["ContextBuilder", "TemplatePages"]
