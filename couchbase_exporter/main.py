"""Main application entry point for the Couchbase exporter."""

import argparse
import signal
import sys
from typing import List, Optional

from prometheus_client.registry import CollectorRegistry

from .collectors.node_collector import NodeCollector
from .collectors.stats_fetcher import StatsFetcher, create_http_client
from .config.loader import ConfigLoader
from .config.models import ExporterConfig
from .config.settings import Settings
from .exporter import CouchbaseExporter
from .server import create_app
from .utils.logger import setup_logger


class ExporterApp:
    """
    Couchbase exporter application.

    Wires the shared HTTP client, the node collector and the exporter into
    a registry and serves it over HTTP until interrupted.
    """

    def __init__(self, config: ExporterConfig):
        """
        Initialize exporter application.

        Args:
            config: Validated exporter configuration
        """
        self.config = config
        self.logger = setup_logger("couchbase_exporter", config.logging.level)

        signal.signal(signal.SIGTERM, self._signal_handler)

        self.http_client = create_http_client(config.node.timeout_seconds)
        self.exporter = CouchbaseExporter(logger=self.logger)
        self.exporter.add_group(NodeCollector(
            config.node.url,
            StatsFetcher(self.http_client, self.logger.getChild("StatsFetcher")),
            self.logger,
            node_name=config.node.name
        ))

        self.registry = CollectorRegistry()
        self.registry.register(self.exporter)
        self.app = create_app(self.registry, config.web.telemetry_path)

        self.logger.info(
            "Exporter initialized",
            extra={
                "node_url": config.node.url,
                "node_name": config.node.name,
                "listen_address": config.web.listen_address,
                "telemetry_path": config.web.telemetry_path
            }
        )

    def _signal_handler(self, signum, frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received {signal_name}, shutting down...")
        self.close()
        sys.exit(0)

    def close(self):
        self.http_client.close()

    def run(self):
        """Serve metrics until interrupted."""
        host, port = self.config.web.host_port
        self.logger.info(f"Listening on {host}:{port}")
        try:
            self.app.run(host=host, port=port, debug=False, threaded=True)
        except KeyboardInterrupt:
            self.logger.info("Received keyboard interrupt")
        finally:
            self.close()
            self.logger.info("Exporter stopped")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Prometheus exporter for Couchbase node statistics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export the local node on :9131/metrics
  couchbase-exporter

  # Only export nodes whose hostname starts with "cb-1"
  couchbase-exporter --node.url http://cb-1:8091 --node.name cb-1

  # Use a config file
  couchbase-exporter --config config/config.yaml
        """
    )

    parser.add_argument(
        '--config',
        default=None,
        help='Path to YAML configuration file (optional)'
    )
    parser.add_argument(
        '--web.listen-address',
        dest='listen_address',
        default=None,
        help='Address to listen on for web interface and telemetry (default: :9131)'
    )
    parser.add_argument(
        '--web.telemetry-path',
        dest='telemetry_path',
        default=None,
        help='Path under which to expose metrics (default: /metrics)'
    )
    parser.add_argument(
        '--node.url',
        dest='node_url',
        default=None,
        help='Couchbase node base URL (default: http://localhost:8091)'
    )
    parser.add_argument(
        '--node.name',
        dest='node_name',
        default=None,
        help='Only export nodes whose hostname starts with this prefix'
    )
    parser.add_argument(
        '--log-level',
        dest='log_level',
        default=None,
        help='Log level (default: INFO)'
    )
    return parser


def load_config(args: argparse.Namespace) -> ExporterConfig:
    """
    Resolve configuration: flags override env vars, env vars override the file.

    Args:
        args: Parsed command-line arguments

    Returns:
        ExporterConfig: Effective configuration
    """
    overrides = Settings.overrides()
    overrides.setdefault("web", {})
    cli = {
        "node": {"url": args.node_url, "name": args.node_name},
        "web": {"listen_address": args.listen_address, "telemetry_path": args.telemetry_path},
        "logging": {"level": args.log_level},
    }
    for section, values in cli.items():
        for key, value in values.items():
            if value is not None:
                overrides[section][key] = value

    return ConfigLoader.load(args.config, overrides)


def main(argv: Optional[List[str]] = None):
    """
    CLI entry point.

    Parses command-line arguments and starts the exporter.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: failed to load configuration: {e}", file=sys.stderr)
        sys.exit(1)

    ExporterApp(config).run()


if __name__ == "__main__":
    main()
