"""HTTP surface of the exporter.

``/inspec`` runs a scrape per request, ``/metrics`` serves the exporter's
own metrics, ``/`` is a small landing page.
"""

from __future__ import annotations

import time
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from inspec_exporter import __version__
from inspec_exporter.core.exceptions import ConfigurationError, UnknownModuleError
from inspec_exporter.core.logging import get_logger, log_scrape_event
from inspec_exporter.core.metrics import ExporterMetrics
from inspec_exporter.core.reload import SettingsSource
from inspec_exporter.scraper import build_collectors, render

logger = get_logger(__name__)

LANDING_HTML = """
<html>
<head>
    <title>inspec Exporter</title>
    <style>
    label { display: inline-block; width: 75px; }
    form label, form input { margin: 10px; }
    </style>
</head>
<body>
    <h1>inspec Exporter</h1>
    <form action="/inspec">
        <label>Target:</label> <input type="text" name="target" placeholder="X.X.X.X" value="1.2.3.4"><br>
        <label>Module:</label> <input type="text" name="module" placeholder="module" value="sudoers"><br>
        <input type="submit" value="Submit">
    </form>
    <p><a href="/metrics">Metrics</a></p>
</body>
</html>
"""


def create_app(
    source: SettingsSource,
    metrics: Optional[ExporterMetrics] = None,
) -> FastAPI:
    """Build the exporter app around a settings source."""
    metrics = metrics or ExporterMetrics(version=__version__)

    app = FastAPI(title="inspec Exporter", version=__version__)
    app.state.source = source
    app.state.metrics = metrics

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        return LANDING_HTML

    @app.get("/metrics")
    def exporter_metrics() -> Response:
        return Response(metrics.render(), media_type=CONTENT_TYPE_LATEST)

    # Sync handler: FastAPI runs it in the threadpool, one inspec process per request
    @app.get("/inspec")
    def inspec(target: str = "", module: str = "") -> Response:
        settings = source.current()
        start = time.perf_counter()

        try:
            collectors = build_collectors(target, module, settings, metrics)
        except ConfigurationError as e:
            metrics.record_error()
            log_scrape_event("scrape_rejected", target, module, level="warning", error=str(e))
            status = 400 if isinstance(e, UnknownModuleError) else 500
            return PlainTextResponse(str(e), status_code=status)

        body = render(collectors)

        duration = time.perf_counter() - start
        metrics.observe_collection(module, duration)
        logger.debug(
            "scrape_complete",
            target=target,
            module=module,
            seconds=round(duration, 3),
        )
        return Response(body, media_type=CONTENT_TYPE_LATEST)

    return app


def start_server(source: SettingsSource, host: str, port: int) -> None:
    """Create the app and serve it until interrupted."""
    import uvicorn

    app = create_app(source)
    logger.info("listening", address=f"{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="warning")
