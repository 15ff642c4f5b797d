"""Prompt assembly for the chat-completion call.

The user message sent to the model is built from the ranked chunks (most
relevant first), an instruction to keep image markdown intact, optional
thread history, and the student's question. The persona is sent
separately as the system message.
"""

from collections.abc import Sequence
from typing import Optional

from ssmgpt.entities import RankedResult

DEFAULT_PERSONA = """\
You are **SSM GPT**, an AI coach for students in the Altitude Coaching Program. \
You are integrated into private Slack channels and accessed via the /ssmgpt command.
Format responses using Markdown. If the context includes images ![Image](...), include them exactly as-is.
Your mission:
- Clarify Altitude lessons, tools, and strategies
- Support students between live calls
- Reduce confusion and increase momentum

Your tone:
- Patient, kind, understanding, and supportive
- Always sound like a knowledgeable private coach helping the student take action

Your knowledge:
- ONLY use the latest content from the following Altitude documents:
  • All Altitude Module Transcripts
  • Altitude Course Slides (Modules 1–6, 7–14, Bonus)
- If there's conflicting info, favor newer content
- NEVER make up answers. If unsure, say:
  "I want to double-check this for accuracy. Can you reach out to your SSM to confirm?"

Output format:
- Keep answers concise and actionable
- Use bullet points or steps where helpful
- If relevant, reference specific modules or terminology
- End every response with:
  "Let me know if you want to dive deeper into this or need an example!"
"""

PROMPT_HEADER = "You are answering a student's question using the context below."

IMAGE_INSTRUCTION = (
    "If any of the context contains images in Markdown format "
    "(e.g., ![Image](http://...)), include them in your response exactly as they "
    "appear. Do not paraphrase or skip them."
)


def format_context(results: Sequence[RankedResult]) -> str:
    """Join ranked chunks as "From <source>:" blocks separated by blank lines."""
    return "\n\n".join(f"From {r.chunk.source}:\n{r.chunk.text}" for r in results)


class PromptAssembler:
    """Builds the user message handed to the chat-completion provider."""

    def __init__(self, persona: str = DEFAULT_PERSONA) -> None:
        self.persona = persona

    def build(
        self,
        results: Sequence[RankedResult],
        question: str,
        thread_context: Optional[str] = None,
    ) -> str:
        """Assemble the prompt text.

        Args:
            results: Ranked chunks, most relevant first
            question: The student's question, appended literally
            thread_context: Earlier messages of the Slack thread, if any

        Returns:
            Single prompt string
        """
        parts = [
            PROMPT_HEADER,
            f"Context:\n{format_context(results)}",
            IMAGE_INSTRUCTION,
        ]
        if thread_context and thread_context.strip():
            parts.append(f"Conversation so far:\n{thread_context.strip()}")
        parts.append(f"User question: {question}")
        return "\n\n".join(parts)
