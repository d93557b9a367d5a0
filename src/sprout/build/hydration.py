"""Hydration bootstrap appended to each page's client module.

The bootstrap reads the marker element the server injects before
``</body>`` (see :mod:`sprout.server.hydration`), decodes the
serialized context, and re-renders the page component over the
server-rendered markup.

An object context is passed to the component as its props, untouched.
Any other JSON value (``null``, strings, numbers, arrays) arrives as
``props.context``.  The request route is never merged into the props;
it is published on ``globalThis.__sprout`` next to the decoded context.
"""

from pathlib import Path

COMPONENT_PLACEHOLDER = "%COMPONENT%"

HYDRATION_BOOTSTRAP = """
import { h as __sprout_h, hydrate as __sprout_hydrate } from "https://esm.sh/preact";

(function() {
  const marker = document.getElementById("__SPROUT__");
  const root = document.getElementById("__sprout");
  if (!marker || !root) return;
  const raw = marker.getAttribute("data-sprout-context") || "";
  const bytes = raw.length ? raw.split(",").map(Number) : [];
  const text = new TextDecoder().decode(new Uint8Array(bytes));
  const context = text ? JSON.parse(text) : null;
  const route = marker.getAttribute("data-sprout-route");
  globalThis.__sprout = Object.freeze({ context, route });
  const isObject = context !== null && typeof context === "object" && !Array.isArray(context);
  const props = isObject ? context : { context };
  __sprout_hydrate(__sprout_h(%COMPONENT%, props), root);
})();
"""


def load_bootstrap(path: str | Path | None) -> str:
    """Return the bootstrap template from *path*, or the packaged default."""
    if path is None:
        return HYDRATION_BOOTSTRAP
    return Path(path).read_text(encoding="utf-8")


def augment_source(client_source: str, bootstrap: str, component_name: str) -> str:
    """Append the bootstrap, bound to *component_name*, to a client module."""
    return client_source + "\n" + bootstrap.replace(COMPONENT_PLACEHOLDER, component_name)
