"""
Command-line interface for Rainbridge.

This module provides the CLI that migrates Raindrop.io collections and
bookmarks into Karakeep lists and bookmarks, and cleans up Karakeep after
test runs.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rainbridge import __version__
from rainbridge.config.pydantic_config import ConfigurationManager
from rainbridge.core.cleanup import cleanup_destination
from rainbridge.core.data_sources import KarakeepClient, RaindropClient
from rainbridge.core.importer import Importer
from rainbridge.utils.error_handler import (
    ConfigurationError,
    ImportAbortedError,
    RainbridgeError,
)
from rainbridge.utils.logging_setup import setup_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


class CLIInterface:
    """Command line interface for the migration tool."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="rainbridge",
            description="Migrate Raindrop.io bookmarks and collections to Karakeep",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  rainbridge
  rainbridge --env-file ~/.config/rainbridge.env --verbose
  rainbridge --karakeep-url https://karakeep.example.com/api/v1 --workers 4
  rainbridge --cleanup --prefix "[test]" --yes

Configuration:
  API tokens are read from RAINDROP_API_TOKEN and KARAKEEP_API_TOKEN, from a
  .env file in the current directory, or from a TOML/JSON file given with
  --config:

  [raindrop]
  api_token = "..."

  [karakeep]
  api_token = "..."
  base_url = "https://api.karakeep.app/v1"

  [network]
  timeout = 30
  max_retries = 5

  [transfer]
  workers = 1
            """,
        )

        parser.add_argument(
            "--version", "-V", action="version", version=f"%(prog)s {__version__}"
        )
        parser.add_argument(
            "--config",
            "-c",
            help="Configuration file path (TOML or JSON format)",
        )
        parser.add_argument(
            "--env-file",
            help="Path of a .env file to load (default: ./.env)",
        )
        parser.add_argument(
            "--karakeep-url",
            help="Karakeep API root, for self-hosted instances",
        )
        parser.add_argument(
            "--workers",
            "-w",
            type=int,
            help="Number of collections imported concurrently (default: 1)",
        )
        parser.add_argument(
            "--max-pages",
            type=int,
            help="Stop with an error if a collection has more pages than this",
        )
        parser.add_argument(
            "--max-retries",
            type=int,
            help="Retries after an HTTP 429 response (default: 5)",
        )
        parser.add_argument(
            "--log-file",
            help="Also write logs to a timestamped file under ./logs/",
        )
        parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Enable debug logging",
        )

        cleanup = parser.add_argument_group("cleanup")
        cleanup.add_argument(
            "--cleanup",
            action="store_true",
            help="Delete Karakeep bookmarks and lists instead of importing",
        )
        cleanup.add_argument(
            "--prefix",
            help="With --cleanup, only delete items whose title starts with this",
        )
        cleanup.add_argument(
            "--yes",
            "-y",
            action="store_true",
            help="Confirm --cleanup",
        )

        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command line arguments."""
        return self.parser.parse_args(args)

    def load_configuration(self, args: argparse.Namespace) -> ConfigurationManager:
        """
        Load configuration and apply command-line overrides.

        Raises:
            ConfigurationError: Configuration is invalid or tokens are missing
        """
        manager = ConfigurationManager(
            config_path=Path(args.config) if args.config else None,
            env_file=Path(args.env_file) if args.env_file else None,
        )
        manager.update_from_cli_args(
            {
                "workers": args.workers,
                "max_pages": args.max_pages,
                "max_retries": args.max_retries,
                "karakeep_url": args.karakeep_url,
            }
        )

        if args.cleanup:
            if not manager.get_token("karakeep"):
                raise ConfigurationError("Missing API token(s): KARAKEEP_API_TOKEN.")
        else:
            manager.require_tokens()

        return manager

    def build_clients(self, manager: ConfigurationManager):
        config = manager.config
        client_args = {
            "timeout": config.network.timeout,
            "max_retries": config.network.max_retries,
            "base_delay": config.network.base_delay,
        }

        raindrop = RaindropClient(
            manager.get_token("raindrop") or "",
            base_url=config.raindrop.base_url,
            max_pages=config.transfer.max_pages,
            **client_args,
        )
        karakeep = KarakeepClient(
            manager.get_token("karakeep") or "",
            base_url=config.karakeep.base_url,
            **client_args,
        )

        return raindrop, karakeep

    def run(self, args=None) -> int:
        """Execute CLI interface."""
        parsed_args = self.parse_args(args)

        try:
            manager = self.load_configuration(parsed_args)
        except ConfigurationError as e:
            print(f"Configuration Error: {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        setup_logging(
            "DEBUG" if parsed_args.verbose else "INFO",
            log_file=parsed_args.log_file,
            tokens=[manager.get_token("raindrop"), manager.get_token("karakeep")],
        )
        logger = logging.getLogger(__name__)

        raindrop, karakeep = self.build_clients(manager)
        with raindrop, karakeep:
            if parsed_args.cleanup:
                return self._run_cleanup(karakeep, parsed_args.prefix, parsed_args.yes)

            workers = manager.config.transfer.workers
            logger.info(f"Rainbridge {__version__} starting (workers: {workers})")
            try:
                summary = Importer(raindrop, karakeep, workers=workers).run_import()
            except ImportAbortedError as e:
                logger.error(f"Import failed: {e}")
                return EXIT_FAILURE

        logger.info(f"{summary}")
        return EXIT_OK

    def _run_cleanup(
        self, client: KarakeepClient, prefix: Optional[str], confirmed: bool
    ) -> int:
        logger = logging.getLogger(__name__)
        if not confirmed:
            target = f"starting with '{prefix}'" if prefix else "ALL"
            logger.error(
                f"--cleanup deletes {target} Karakeep bookmarks and lists; "
                "pass --yes to confirm"
            )
            return EXIT_FAILURE

        try:
            result = cleanup_destination(client, prefix)
        except RainbridgeError as e:
            logger.error(f"Cleanup failed: {e}")
            return EXIT_FAILURE

        return EXIT_FAILURE if result.errors else EXIT_OK


def main(args=None):
    """Main entry point for the CLI."""
    cli = CLIInterface()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
