"""Post-processing of generated answers for display in Slack.

Markdown images are rewritten into Slack link syntax pointing at the
public static asset host, then the text is split into segments that fit
inside a Slack section block.
"""

import re

DEFAULT_LOCAL_BASE_URL = "http://localhost:3000"
DEFAULT_MAX_SEGMENT_LENGTH = 2900
DEFAULT_PREVIEW_LABEL = "Click here to preview image"

IMAGE_MARKDOWN_PATTERN = re.compile(r"!\[.*?\]\((.*?)\)")


class ResponseFormatter:
    """Renders answer text into Slack-ready segments."""

    def __init__(
        self,
        public_base_url: str,
        local_base_url: str = DEFAULT_LOCAL_BASE_URL,
        max_segment_length: int = DEFAULT_MAX_SEGMENT_LENGTH,
        preview_label: str = DEFAULT_PREVIEW_LABEL,
    ) -> None:
        if max_segment_length < 1:
            raise ValueError("max_segment_length must be at least 1")
        self.public_base_url = public_base_url.rstrip("/")
        self.local_base_url = local_base_url.rstrip("/")
        self.max_segment_length = max_segment_length
        self.preview_label = preview_label

    def rewrite_url(self, url: str) -> str:
        """Point a local asset URL at the public host; other URLs pass through."""
        base = self.local_base_url
        if url == base or url.startswith(base + "/"):
            return self.public_base_url + url[len(base):]
        return url

    def rewrite_images(self, text: str) -> str:
        """Replace every ![alt](url) with <public-url|preview label>."""

        def replace(match: re.Match) -> str:
            return f"<{self.rewrite_url(match.group(1))}|{self.preview_label}>"

        return IMAGE_MARKDOWN_PATTERN.sub(replace, text)

    def split(self, text: str) -> list[str]:
        """Split text on raw character boundaries.

        No attempt is made to respect word or markup boundaries, so joining
        the segments always reproduces the input exactly.
        """
        size = self.max_segment_length
        return [text[i : i + size] for i in range(0, len(text), size)]

    def render(self, answer: str) -> list[str]:
        """Rewrite image links and split into display segments.

        Empty input yields no segments.
        """
        if not answer:
            return []
        return self.split(self.rewrite_images(answer))
