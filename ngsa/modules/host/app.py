from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from ... import __version__
from ...models.secrets import Secrets
from ..shutdown.cancellation import CancellationToken


def create_app(secrets: Secrets, database_display_name: str, cancellation: CancellationToken) -> FastAPI:
    """Build the ASGI app exposing the readiness and liveness probes.

    The secrets, display name and cancellation token are kept on ``app.state``
    for the request handlers mounted by the rest of the application.
    """
    app = FastAPI(title="NGSA", version=__version__)
    app.state.secrets = secrets
    app.state.database_name = database_display_name
    app.state.cancellation = cancellation

    @app.get("/version", response_class=PlainTextResponse)
    async def version():
        return __version__

    @app.get("/healthz", response_class=PlainTextResponse)
    async def healthz():
        # stop receiving traffic while draining
        if cancellation.is_cancelled:
            return PlainTextResponse("stopping", status_code=503)
        return "pass"

    return app
