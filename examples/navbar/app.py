"""Navbar — every page shares a base context, no routes per page.

Demonstrates kidapage's ``TemplatePages`` middleware on a chirp app:
- ``GET /`` renders ``pages/index.html``
- ``GET /about`` renders ``pages/about.html``
- ``GET /docs`` renders ``pages/docs/index.html``
- ``/complex-page`` is an explicit route that starts from the same
  base context and adds its own data

The navbar partial reads ``username`` from the base context, which comes
from shared state registered with ``app.provide()``.

Run:
    python app.py
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from chirp import App, AppConfig, Request, Template

from kidapage import TemplatePages

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class State:
    name: str


_state = State(name="User Name")


def get_state() -> State:
    return _state


async def base_context(request: Request, state: State) -> dict[str, Any]:
    """Context shared by every page.

    Could just as well query a database handle kept in ``State``.
    """
    return {"username": state.name, "path": request.path}


app = App(AppConfig(template_dir=TEMPLATES_DIR))
app.provide(State, get_state)
TemplatePages("pages", base_context).install(app)


@app.route("/complex-page")
async def complex_page(request: Request, state: State):
    context = await base_context(request, state)
    return Template("complex-page.html", **context, more_info="data")


@app.route("/contact", methods=["POST"])
async def contact(request: Request):
    return f"Thanks for writing, {len(await request.body())} bytes received."


if __name__ == "__main__":
    app.run()
