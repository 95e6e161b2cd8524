"""Template page resolution.

Maps request paths to template names so pages can be served without
registering a route per template.
"""

from kidapage.pages.resolve import normalize_prefix, select_template, template_candidates

__all__ = ["normalize_prefix", "select_template", "template_candidates"]
