"""HTTP entry point: Slack events, static assets and a health check."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from slack_bolt.adapter.fastapi.async_handler import AsyncSlackRequestHandler
from slack_bolt.async_app import AsyncApp

from ssmgpt import __version__
from ssmgpt.config.schema import AppConfig
from ssmgpt.interfaces.slack import create_slack_app
from ssmgpt.observability.logging import get_logger
from ssmgpt.pipelines.answer import AnswerPipeline

logger = get_logger(__name__)


def create_app(
    config: AppConfig,
    pipeline: AnswerPipeline,
    slack_app: Optional[AsyncApp] = None,
) -> FastAPI:
    """Application factory.

    - Mounts the image directory referenced by rewritten answer links
    - Routes Slack events to the Bolt app
    - Exposes /health with corpus size
    """
    app = FastAPI(title=config.app_name, version=__version__)

    if not config.server.static_dir.is_dir():
        logger.warning("static_dir_missing", path=str(config.server.static_dir))
    app.mount(
        config.server.static_url_path,
        StaticFiles(directory=config.server.static_dir, check_dir=False),
        name="static",
    )

    if slack_app is None:
        slack_app = create_slack_app(config.slack, pipeline)
    handler = AsyncSlackRequestHandler(slack_app)

    @app.post(config.server.events_path)
    async def slack_events(request: Request):
        return await handler.handle(request)

    @app.get("/health")
    async def health():
        corpus = pipeline.retriever.corpus
        return {
            "status": "ok",
            "version": __version__,
            "corpus_chunks": len(corpus),
            "embedding_dimension": corpus.dimension,
        }

    return app
