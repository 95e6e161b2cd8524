"""Kida template listing and rendering."""

from kidapage.templating.registry import TemplateRegistry, render_template, template_names

__all__ = ["TemplateRegistry", "render_template", "template_names"]
