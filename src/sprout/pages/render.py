"""Component rendering.

A component is any callable that takes props as keyword arguments and
returns markup.  Components written as kida templates are built with
:func:`template_component` and render through a shared autoescaping
environment.
"""

from collections.abc import Callable, Mapping
from typing import Any

from kida import Environment

_env: Environment | None = None


def _environment() -> Environment:
    global _env
    if _env is None:
        _env = Environment(autoescape=True)
    return _env


def render_component(component: Callable[..., Any], props: Mapping[str, Any]) -> str:
    """Render *component* with *props* to an HTML string."""
    result = component(**props)
    if hasattr(result, "__html__"):
        return str(result.__html__())
    return "" if result is None else str(result)


def template_component(name: str, source: str) -> Callable[..., str]:
    """Build a component from a kida template source.

    The returned callable is named *name*, which is the name the
    hydration bootstrap uses to mount the client-side counterpart::

        component = template_component("HomePage", "<b>{{ url }}</b>")
    """
    template = _environment().from_string(source)

    def render(**props: Any) -> str:
        return template.render(props)

    render.__name__ = name
    render.__qualname__ = name
    return render
