"""Dash application entry point."""

import os

from dash import Dash

from invoicegen import callbacks  # noqa: F401  registers the callbacks
from invoicegen.layout import build_layout
from invoicegen.lib import logs, paths
from invoicegen.state import APP_TITLE

LOG = logs.logger(__file__)

# Configuration from environment
APP_PORT = int(os.getenv("INVOICEGEN_PORT", "8050"))
APP_DEBUG = os.getenv("INVOICEGEN_DEBUG", "false").lower() in {"1", "true", "yes"}

app = Dash(
    __name__,
    title=APP_TITLE,
    assets_folder=str(paths.assets_dir()),
    suppress_callback_exceptions=True,
)
app.layout = build_layout()
server = app.server


def main() -> None:
    """Entrypoint used by the ``invoicegen`` console script."""
    LOG.info("Starting %s on port %s", APP_TITLE, APP_PORT)
    app.run(debug=APP_DEBUG, host="0.0.0.0", port=APP_PORT)


if __name__ == "__main__":
    main()
