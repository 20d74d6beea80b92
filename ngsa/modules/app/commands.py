import sys

import click

from ... import __version__
from ...models.config import AppConfig, LogLevel, OutputFormat
from ..logging import create_logger
from ..secrets import ConfigurationError
from .command.run import RunCommand


def create_app_command() -> click.Command:
    """Create the root ngsa command."""

    @click.command(name="ngsa")
    @click.version_option(version=__version__, message="%(version)s")
    @click.option("--in-memory", is_flag=True, envvar="NGSA_IN_MEMORY",
                  help="Use the in-memory fixture instead of the secrets volume")
    @click.option("--secrets-volume", "-v", default="secrets", envvar="NGSA_SECRETS_VOLUME",
                  help="Directory containing one file per secret")
    @click.option("--port", "-p", type=int, default=8080, envvar="NGSA_PORT",
                  help="Listen port")
    @click.option("--log-level", "-l",
                  type=click.Choice([level.value for level in LogLevel], case_sensitive=False),
                  default="INFO", envvar="NGSA_LOG_LEVEL",
                  help="Set the logging level")
    @click.option("--output", "-o",
                  type=click.Choice([fmt.value for fmt in OutputFormat]),
                  default="colorful", envvar="NGSA_OUTPUT",
                  help="Log format (colorful for terminals, plain or json for log collectors)")
    @click.option("--dry-run", "-d", is_flag=True,
                  help="Validate configuration and secrets, then exit")
    def ngsa(in_memory: bool, secrets_volume: str, port: int, log_level: str, output: str, dry_run: bool):
        """Start the NGSA web application."""
        logger = create_logger(output, log_level.upper())

        try:
            config = AppConfig.from_options(
                in_memory=in_memory,
                secrets_volume=secrets_volume,
                port=port,
                log_level=log_level.upper(),
                output=output,
                dry_run=dry_run,
            )
        except ConfigurationError as err:
            logger.log_error(f"Startup error: {str(err)}")
            sys.exit(1)

        command = RunCommand(logger=logger, config=config)
        sys.exit(command.run())

    return ngsa
