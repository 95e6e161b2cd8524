"""Template page middleware for chirp.

Renders kida templates for GET requests whose path matches a template
file, without a route per page. Non-matching requests and every non-GET
request fall through to the next handler untouched.

Typical wiring, with a shared "base context" that fills in the navbar::

    async def base_context(request: Request, state: State) -> dict[str, Any]:
        return {"username": state.name}

    app = App(AppConfig(template_dir="templates"))
    app.provide(State, get_state)
    TemplatePages("pages", base_context).install(app)

``GET /about`` then renders ``pages/about.html`` (or
``pages/about/index.html``) with the dict returned by ``base_context``.
"""

import inspect
import logging
import threading
from collections.abc import Awaitable, Callable
from typing import Any

from chirp.app import App
from chirp.errors import ConfigurationError
from chirp.http.request import Request
from chirp.http.response import Response
from chirp.middleware.protocol import AnyResponse, Next
from kida import Environment

from kidapage.pages.resolve import (
    Precedence,
    normalize_prefix,
    select_template,
    template_candidates,
)
from kidapage.templating.registry import TemplateRegistry, render_template

logger = logging.getLogger("kidapage.pages")

type ContextBuilder = Callable[..., Awaitable[dict[str, Any]]]

_MISSING_ENV = (
    "TemplatePages has no kida Environment to render with. "
    "Pass env=... or call install(app) so the app's environment is used."
)


class TemplatePages:
    """Middleware that serves templates matching the request path.

    Only GET is intercepted. HEAD, like every other method, goes to the
    next handler, so a HEAD for a page with no explicit route gets
    whatever the router answers (usually 404).

    Args:
        prefix: Template directory prefix searched for pages. Leading and
            trailing slashes are ignored (``"/pages/"`` == ``"pages"``).
        context_builder: Async callable whose first argument is the
            request and which returns the render context. Further
            parameters annotated with a type registered through
            ``app.provide()`` are injected, as for route handlers.
            Called once per intercepted request.
        env: kida Environment to render with. When omitted, the
            environment of the app passed to ``install()`` is used.
        precedence: Which candidate wins when both ``X.html`` and
            ``X/index.html`` exist. ``"index"`` (the default) picks the
            directory index, ``"file"`` picks ``X.html``.
    """

    __slots__ = (
        "_app",
        "_context_builder",
        "_env",
        "_injected",
        "_lock",
        "_precedence",
        "_prefix",
        "_registry",
    )

    def __init__(
        self,
        prefix: str,
        context_builder: ContextBuilder,
        *,
        env: Environment | None = None,
        precedence: Precedence = "index",
    ) -> None:
        if precedence not in ("index", "file"):
            msg = f"precedence must be 'index' or 'file', got {precedence!r}"
            raise ConfigurationError(msg)
        self._prefix = normalize_prefix(prefix)
        self._context_builder = context_builder
        self._env = env
        self._precedence = precedence
        self._injected = _injected_params(context_builder)
        self._app: App | None = None
        self._registry: TemplateRegistry | None = None
        self._lock = threading.Lock()

    @property
    def prefix(self) -> str:
        """The normalized template prefix."""
        return self._prefix

    def install(self, app: App) -> None:
        """Add this middleware to *app* and check its wiring at startup.

        The app's kida environment is used unless ``env`` was given. A
        missing environment or provider raises ``ConfigurationError``
        from the startup hook, so the server never accepts a request.
        """
        self._app = app
        app.add_middleware(self)
        app.on_startup(self._startup)

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        """Render a matching template or fall through."""
        if request.method != "GET":
            return await next(request)

        registry = self._resolve()
        candidates = template_candidates(request.path.rstrip("/"), self._prefix)
        logger.debug("Checking template candidates: %r", candidates)

        template = select_template(candidates, registry.names(), precedence=self._precedence)
        if template is None:
            logger.debug("No matching template for path: %s", request.path)
            return await next(request)

        logger.debug("Matched path to template: %s", template)
        context = await self._context_builder(request, **self._provided())
        return Response(body=render_template(registry.env, template, context))

    # -- Internal --

    def _startup(self) -> None:
        registry = self._resolve()
        self._provided_factories()
        pages = [name for name in registry.names() if name.startswith(f"{self._prefix}/")]
        logger.debug("Serving %d template pages under %r", len(pages), self._prefix)

    def _resolve(self) -> TemplateRegistry:
        registry = self._registry
        if registry is not None:
            return registry
        with self._lock:
            if self._registry is None:
                self._registry = TemplateRegistry(self._environment())
            return self._registry

    def _environment(self) -> Environment:
        if self._env is not None:
            return self._env
        # Set by App._freeze(), which runs before startup hooks and requests
        env = self._app._kida_env if self._app is not None else None
        if env is None:
            raise ConfigurationError(_MISSING_ENV)
        return env

    def _provided_factories(self) -> dict[str, Callable[..., Any]]:
        if not self._injected:
            return {}
        providers = self._app._providers if self._app is not None else {}
        factories: dict[str, Callable[..., Any]] = {}
        for name, annotation in self._injected:
            factory = providers.get(annotation)
            if factory is None:
                msg = (
                    f"Context builder parameter {name!r} needs a provider for "
                    f"{getattr(annotation, '__name__', annotation)}. "
                    f"Register one with app.provide() and install TemplatePages on that app."
                )
                raise ConfigurationError(msg)
            factories[name] = factory
        return factories

    def _provided(self) -> dict[str, Any]:
        return {name: factory() for name, factory in self._provided_factories().items()}


def _injected_params(builder: Callable[..., Any]) -> tuple[tuple[str, Any], ...]:
    """Annotated parameters after the first, resolved from app providers."""
    params = list(inspect.signature(builder, eval_str=True).parameters.values())[1:]
    return tuple(
        (param.name, param.annotation)
        for param in params
        if param.annotation is not inspect.Parameter.empty
        and param.kind in (param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY)
    )
