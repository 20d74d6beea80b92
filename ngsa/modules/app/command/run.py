import asyncio
from typing import Callable, Optional

from .... import __version__
from ....models.config import AppConfig
from ....models.secrets import Secrets
from ...logging import BaseLogger
from ...host import HostStartupError, WebHost, create_app
from ...secrets import SecretsError, load_secrets, get_database_display_name
from ...shutdown import CancellationToken, ShutdownCoordinator
from ...shutdown.coordinator import exit_process


class RunCommand:
    """Command class for starting the web application."""

    def __init__(
        self,
        logger: BaseLogger,
        config: AppConfig,
        exit_process: Callable[[int], None] = exit_process
    ):
        """
        Initialize the run command.

        Args:
            logger: Logger instance
            config: Resolved application configuration
            exit_process: Passed to the shutdown coordinator
        """
        self.logger = logger
        self.config = config
        self.exit_process = exit_process
        self.secrets: Optional[Secrets] = None
        self.database_name = ""

    def load_secrets(self) -> Secrets:
        """Load and validate secrets, and derive the database display name."""
        secrets = load_secrets(self.config.secrets_volume, self.config.in_memory)
        self.secrets = secrets
        self.database_name = get_database_display_name(secrets.database_server_url)
        self.logger.log_debug(
            "Using in-memory secrets" if self.config.in_memory
            else f"Secrets loaded from volume '{secrets.source_volume}'"
        )
        return secrets

    def build_host(self, secrets: Secrets, cancellation: CancellationToken) -> WebHost:
        app = create_app(secrets, self.database_name, cancellation)
        return WebHost(
            app,
            port=self.config.port,
            logger=self.logger,
            log_level=self.config.log_level.value
        )

    async def serve(self, secrets: Secrets) -> int:
        """Serve until a shutdown signal stops the host.

        Returns:
            Process exit status; 1 if the host could not start
        """
        cancellation = CancellationToken()
        host = self.build_host(secrets, cancellation)
        coordinator = ShutdownCoordinator(
            host,
            self.logger,
            cancellation=cancellation,
            exit_process=self.exit_process
        )
        coordinator.setup_signal_handlers()

        try:
            try:
                await host.start()
            except HostStartupError as err:
                self.logger.log_error(f"Startup error: {str(err)}")
                return 1

            self.logger.log_startup(__version__, self.database_name, self.config.port)
            await host.wait_closed()
            await coordinator.join()
            return 0
        finally:
            coordinator.restore_signal_handlers()

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Process exit status
        """
        try:
            secrets = self.load_secrets()
        except SecretsError as err:
            self.logger.log_error(f"Startup error: {str(err)}")
            return 1

        if self.config.dry_run:
            settings = self.config.to_display_dict()
            settings.update({
                "version": __version__,
                "database_server": self.database_name,
                "database": secrets.database_name,
                "collection": secrets.collection_name,
            })
            self.logger.log_config(settings)
            return 0

        return asyncio.run(self.serve(secrets))
