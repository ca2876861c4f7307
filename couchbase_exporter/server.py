"""Flask app serving the metrics endpoint and a landing page."""

from flask import Flask, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_client.registry import CollectorRegistry

LANDING_PAGE = """<html>
<head><title>Couchbase exporter</title></head>
<body>
<h1>Couchbase exporter</h1>
<p><a href="{path}">Metrics</a></p>
</body>
</html>
"""


def create_app(registry: CollectorRegistry, telemetry_path: str = "/metrics") -> Flask:
    """
    Build the exporter web app.

    Args:
        registry: Registry rendered on every request to the telemetry path
        telemetry_path: Path serving Prometheus text format

    Returns:
        Flask: Configured application
    """
    app = Flask(__name__)

    @app.route(telemetry_path)
    def metrics_endpoint():
        return Response(generate_latest(registry), content_type=CONTENT_TYPE_LATEST)

    @app.route("/")
    def home():
        return Response(LANDING_PAGE.format(path=telemetry_path), mimetype="text/html")

    return app
