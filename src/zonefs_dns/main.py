"""
DNS Server Main Entry Point

This script provides the main entry point for running the DNS server.
"""

import argparse
import asyncio
import platform
import signal
import sys
from typing import List, Optional

from zonefs_dns.config.loader import load_config_from_file
from zonefs_dns.config.schema import DNSServerConfig, ServerConfig
from zonefs_dns.core import DNSServer
from zonefs_dns.dns_logging import (
    DNSRequestLogger,
    get_logger,
    log_exception,
    setup_logging,
)


class ZoneDNSApp:
    """DNS Server Application"""

    def __init__(self, config: DNSServerConfig):
        self.config = config
        self.dns_server = None
        self._shutdown_event = asyncio.Event()
        self.logger = None

    def initialize(self):
        """Initialize the application"""
        setup_logging(self.config.logging)
        self.logger = get_logger("zonefs_dns_app")

        request_logger = None
        if self.config.logging.log_queries:
            request_logger = DNSRequestLogger()

        self.dns_server = DNSServer(self.config, request_logger=request_logger)

        self.logger.info(
            "DNS server application initialized",
            zone_root=self.config.zone.root_path,
            default_ttl=self.config.zone.default_ttl,
            dns_port=self.config.server.dns_port,
            log_queries=self.config.logging.log_queries,
        )

    async def start(self):
        """Start the DNS server and serve until a shutdown signal arrives"""
        if not self.dns_server:
            self.initialize()

        try:
            await self.dns_server.start()

            self.logger.info(
                "DNS server started successfully",
                bind_address=self.config.server.bind_address,
                dns_port=self.config.server.dns_port,
            )

            loop = asyncio.get_running_loop()
            if platform.system() != "Windows":
                for sig in [signal.SIGTERM, signal.SIGINT]:
                    loop.add_signal_handler(sig, self._signal_handler)

            await self._shutdown_event.wait()

        except Exception as e:
            log_exception(self.logger, "Error starting DNS server", e)
            raise
        finally:
            await self.stop()

    async def stop(self):
        """Stop the DNS server"""
        if self.dns_server:
            await self.dns_server.stop()
        self.logger.info("DNS server application shutdown complete")

    def _signal_handler(self):
        """Handle shutdown signals"""
        self.logger.info("Received shutdown signal")
        self._shutdown_event.set()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Authoritative DNS server answering from a zone directory"
    )
    parser.add_argument(
        "zone_root",
        nargs="?",
        help="Zone data directory (overrides zone.root_path)",
    )
    parser.add_argument("--config", "-c", help="Configuration file path")
    parser.add_argument(
        "--bind", help="Address to bind (overrides server.bind_address)"
    )
    parser.add_argument(
        "--port", type=int, help="UDP port to listen on (overrides server.dns_port)"
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> DNSServerConfig:
    """Load configuration and apply command line overrides"""
    config = load_config_from_file(args.config, zone_root=args.zone_root)

    if args.bind is not None or args.port is not None:
        config.server = ServerConfig(
            bind_address=args.bind or config.server.bind_address,
            dns_port=config.server.dns_port if args.port is None else args.port,
            buffer_size=config.server.buffer_size,
            use_uvloop=config.server.use_uvloop,
        )

    return config


async def main(config: DNSServerConfig):
    """Main function"""
    app = ZoneDNSApp(config)
    await app.start()


def run(argv: Optional[List[str]] = None) -> None:
    """Console script entry point"""
    args = parse_args(argv)

    try:
        config = build_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        if config.server.use_uvloop and platform.system() != "Windows":
            import uvloop

            uvloop.run(main(config))
        else:
            asyncio.run(main(config))
    except KeyboardInterrupt:
        print("\nDNS server interrupted")
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
