"""Slack event handling.

Two triggers reach the answer pipeline:
- the slash command (default /ssmgpt), acknowledged immediately and
  answered with a channel message
- app mentions, answered in the thread; earlier thread messages are
  passed along as conversation context

Any failure while answering is logged and turned into a single apology
message. Nothing is retried.
"""

import re
from typing import Any, Optional

from slack_bolt.async_app import AsyncApp

from ssmgpt.config.schema import SlackConfig
from ssmgpt.entities import AnswerResult
from ssmgpt.observability.logging import get_logger
from ssmgpt.pipelines.answer import AnswerPipeline

logger = get_logger(__name__)

THINKING_MESSAGE = "Thinking..."
COMMAND_ERROR_MESSAGE = "Something went wrong. Please try again later."
MENTION_ERROR_MESSAGE = "Sorry, something went wrong."
EMPTY_QUESTION_MESSAGE = "Ask me a question about the Altitude program, e.g. `{command} how do I choose a niche?`"
EMPTY_ANSWER_MESSAGE = "I couldn't come up with an answer to that. Try rephrasing your question."

MENTION_PATTERN = re.compile(r"<@[^>]+>\s*")


def build_blocks(segments: list[str]) -> list[dict[str, Any]]:
    """One mrkdwn section block per rendered segment."""
    return [
        {"type": "section", "text": {"type": "mrkdwn", "text": segment}}
        for segment in segments
    ]


def answer_payload(result: AnswerResult, prefix: str = "") -> dict[str, Any]:
    """Message text and blocks for an answer.

    Slack rejects a message with neither text nor blocks, so an empty
    answer is replaced by EMPTY_ANSWER_MESSAGE.
    """
    if not result.segments:
        logger.warning("empty_answer", question=result.question)
        return {"text": prefix + EMPTY_ANSWER_MESSAGE}
    return {"text": prefix + result.answer, "blocks": build_blocks(result.segments)}


def strip_mention(text: str) -> str:
    """Remove the leading bot mention from message text."""
    return MENTION_PATTERN.sub("", text or "", count=1).strip()


class SlackBot:
    """Handlers for the slash command and app mention triggers."""

    def __init__(self, pipeline: AnswerPipeline, command: str = "/ssmgpt") -> None:
        self.pipeline = pipeline
        self.command = command

    async def fetch_thread_context(self, client: Any, channel: str, thread_ts: str, current_ts: Optional[str]) -> str:
        """Join the text of earlier messages in a thread, oldest first."""
        response = await client.conversations_replies(channel=channel, ts=thread_ts)
        messages = response.get("messages") or []
        texts = [
            message.get("text", "")
            for message in messages
            if message.get("ts") != current_ts and message.get("text")
        ]
        return "\n".join(texts)

    async def handle_command(self, ack: Any, respond: Any, command: dict, client: Any) -> None:
        """Handle the slash command."""
        await ack()

        channel = command["channel_id"]
        question = (command.get("text") or "").strip()
        if not question:
            await respond(EMPTY_QUESTION_MESSAGE.format(command=self.command))
            return

        await respond(THINKING_MESSAGE)
        logger.info("slash_command_received", channel=channel, user=command.get("user_id"))

        try:
            result = await self.pipeline.answer(question)
            await client.chat_postMessage(channel=channel, **answer_payload(result))
        except Exception:
            logger.exception("slash_command_failed", channel=channel)
            await client.chat_postMessage(channel=channel, text=COMMAND_ERROR_MESSAGE)

    async def handle_mention(self, event: dict, client: Any) -> None:
        """Handle an app mention, replying in its thread."""
        channel = event["channel"]
        user = event.get("user")
        reply_ts = event.get("thread_ts") or event.get("ts")
        question = strip_mention(event.get("text", ""))

        if not question:
            await client.chat_postMessage(
                channel=channel,
                text=f"<@{user}> " + EMPTY_QUESTION_MESSAGE.format(command=self.command),
                thread_ts=reply_ts,
            )
            return

        logger.info("mention_received", channel=channel, user=user, in_thread=bool(event.get("thread_ts")))

        try:
            thread_context = None
            if event.get("thread_ts"):
                thread_context = await self.fetch_thread_context(
                    client, channel, event["thread_ts"], event.get("ts")
                )

            result = await self.pipeline.answer(question, thread_context=thread_context)
            await client.chat_postMessage(
                channel=channel,
                thread_ts=reply_ts,
                **answer_payload(result, prefix=f"<@{user}> "),
            )
        except Exception:
            logger.exception("mention_failed", channel=channel)
            await client.chat_postMessage(
                channel=channel,
                text=f"<@{user}> {MENTION_ERROR_MESSAGE}",
                thread_ts=reply_ts,
            )

    def register(self, app: AsyncApp) -> None:
        """Attach the handlers to a Bolt app."""

        @app.command(self.command)
        async def on_command(ack, respond, command, client):
            await self.handle_command(ack=ack, respond=respond, command=command, client=client)

        @app.event("app_mention")
        async def on_mention(event, client):
            await self.handle_mention(event=event, client=client)


def create_slack_app(config: SlackConfig, pipeline: AnswerPipeline) -> AsyncApp:
    """Create the Bolt app with both triggers registered."""
    app = AsyncApp(
        token=config.bot_token,
        signing_secret=config.signing_secret,
    )
    SlackBot(pipeline, command=config.command).register(app)
    return app
