"""HTTP listener.

Starts a pounce ASGI server with the live sprout Site object. The site
must already be loaded (its manifest read and middleware bound) so no
request can reach a partially built distribution.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sprout.site import Site

logger = logging.getLogger("sprout.server")


def run_server(site: Site, host: str, port: int) -> None:
    """Serve *site* on ``host:port`` until interrupted.

    Pounce's ``run()`` takes an import string, but sprout has a live
    ``Site`` object, so ``pounce.Server`` is used directly with the ASGI
    callable.  A single worker is used: each worker would otherwise
    need its own loaded copy of the manifest.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1)
    logger.info("Serving %d page(s) on http://%s:%d", len(site.manifest), host, port)
    Server(config, site).run()
