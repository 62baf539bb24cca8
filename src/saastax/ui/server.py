"""
saastax.ui.server
~~~~~~~~~~~~~~~~~
Uvicorn launcher for the saastax web API.

Called by the CLI via ``saastax --ui``::

    saastax --ui --port 8080 --no-browser

Interactive API docs are served at ``/docs``.
"""

from __future__ import annotations

import logging
import sys
import threading
import time
import webbrowser

from saastax.config import cfg

logger = logging.getLogger(__name__)

DEFAULT_HOST = cfg.ui_host
DEFAULT_PORT = cfg.ui_port


def _open_browser(url: str, delay: float = 1.2) -> None:
    """Open the browser after a short delay so the server is ready."""
    def _open():
        time.sleep(delay)
        webbrowser.open(url)
    t = threading.Thread(target=_open, daemon=True)
    t.start()


def launch(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    reload: bool = False,
    open_browser: bool = True,
    log_level: str = "warning",
) -> None:
    """
    Start the saastax API server.

    Args:
        host:         Bind address (default from config, 127.0.0.1).
        port:         TCP port (default from config, 8000).
        reload:       Enable uvicorn hot-reload (dev mode only).
        open_browser: Open the API docs in the browser on start.
        log_level:    Uvicorn log level.
    """
    try:
        import uvicorn
    except ImportError:
        print(
            "[error] uvicorn is not installed.\n"
            "        Install the UI extras:  pip install saastax[ui]",
            file=sys.stderr,
        )
        sys.exit(1)

    url = f"http://{host}:{port}"

    print(f"\n  saastax API  →  {url}")
    print(f"  API docs     →  {url}/docs")
    print(f"  Press Ctrl+C to stop.\n")
    logger.info("Starting uvicorn on %s (reload=%s)", url, reload)

    if open_browser:
        _open_browser(f"{url}/docs")

    uvicorn.run(
        "saastax.ui.api:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )
