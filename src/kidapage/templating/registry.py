"""Template name registry.

Answers "which templates can this environment load?" without walking the
template tree on every request. The listing is taken once and kept as a
frozenset. When the environment has ``auto_reload`` on (chirp sets it in
debug mode), the loader is asked again each time so new pages show up
without a restart.
"""

import threading
from collections.abc import Mapping
from typing import Any

from kida import Environment


def template_names(env: Environment) -> frozenset[str]:
    """Return the names of every template the environment can load.

    Composite loaders (anything exposing ``loaders``, such as the
    ``ChoiceLoader`` chirp builds) are walked recursively. Loaders that
    cannot list their templates contribute nothing.
    """
    return frozenset(_list_loader(env.loader))


def _list_loader(loader: Any) -> list[str]:
    if loader is None:
        return []
    list_fn = getattr(loader, "list_templates", None)
    if list_fn is not None:
        return list(list_fn())
    names: list[str] = []
    for child in getattr(loader, "loaders", ()):
        names.extend(_list_loader(child))
    return names


class TemplateRegistry:
    """Cached set of template names for one kida environment.

    Thread safety:
        The first listing happens under a lock with a double check, so
        concurrent first requests list the tree once.
    """

    __slots__ = ("_env", "_lock", "_names")

    def __init__(self, env: Environment) -> None:
        self._env = env
        self._lock = threading.Lock()
        self._names: frozenset[str] | None = None

    @property
    def env(self) -> Environment:
        return self._env

    def names(self) -> frozenset[str]:
        """Return the template names, listing the loader at most once.

        Re-lists on every call while ``env.auto_reload`` is on.
        """
        if self._env.auto_reload:
            return template_names(self._env)
        names = self._names
        if names is None:
            with self._lock:
                if self._names is None:
                    self._names = template_names(self._env)
                names = self._names
        return names


def render_template(env: Environment, name: str, context: Mapping[str, Any]) -> str:
    """Render a full template to string. Synchronous."""
    return env.get_template(name).render(dict(context))
