"""kidapage — serve kida templates straight from the URL path in chirp.

A chirp middleware that renders ``pages/about.html`` for ``GET /about``
without a route per page, using a shared async "base context" builder.
Useful for site-wide data such as a navbar that shows the logged-in user.

Basic usage::

    from chirp import App, AppConfig
    from kidapage import TemplatePages

    async def base_context(request, state: State):
        return {"username": state.name}

    app = App(AppConfig(template_dir="templates"))
    app.provide(State, get_state)
    TemplatePages("pages", base_context).install(app)
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "ContextBuilder",
    "TemplatePages",
    "TemplateRegistry",
    "normalize_prefix",
    "select_template",
    "template_candidates",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import kidapage`` from importing chirp until it is needed.
    """
    if name in ("ContextBuilder", "TemplatePages"):
        from kidapage import middleware as _mw

        return getattr(_mw, name)

    if name == "TemplateRegistry":
        from kidapage.templating.registry import TemplateRegistry

        return TemplateRegistry

    if name in ("normalize_prefix", "select_template", "template_candidates"):
        from kidapage.pages import resolve as _resolve

        return getattr(_resolve, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
