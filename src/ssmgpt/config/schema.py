"""Configuration schema using Pydantic.

Why this exists:
- Type-safe configuration with validation
- Environment variable support (SSMGPT_ prefix, __ for nesting)
- Secrets stay in the environment; the TOML file references them as ${VAR}
"""

from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EmbeddingProviderType(str, Enum):
    """Supported embedding providers."""

    OPENAI = "openai"


class LLMProviderType(str, Enum):
    """Supported LLM providers."""

    OPENAI = "openai"


class EmbeddingConfig(BaseModel):
    """Embedding provider configuration.

    Must match the model the corpus was embedded with.
    """

    provider: EmbeddingProviderType = EmbeddingProviderType.OPENAI
    model_name: str = "text-embedding-3-small"
    api_key: Optional[str] = "OPENAI_API_KEY"
    extra_params: dict[str, Any] = Field(default_factory=dict)


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: LLMProviderType = LLMProviderType.OPENAI
    model_name: str = "gpt-4"
    api_key: Optional[str] = "OPENAI_API_KEY"
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    persona_file: Optional[Path] = Field(
        default=None, description="Text file overriding the built-in persona"
    )
    extra_params: dict[str, Any] = Field(default_factory=dict)


class CorpusConfig(BaseModel):
    """Embedded corpus location."""

    path: Path = Path("altitude_embedded_chunks.json")

    def model_post_init(self, __context: Any) -> None:
        """Expand ~ in paths."""
        self.path = self.path.expanduser()


class RetrievalConfig(BaseModel):
    """Retrieval settings."""

    top_k: int = Field(default=5, gt=0, description="Chunks passed to the model per question")
    enhance_questions: bool = Field(
        default=False, description="Wrap questions in an intent-specific template"
    )


class FormattingConfig(BaseModel):
    """Answer rendering for Slack."""

    local_base_url: str = "http://localhost:3000"
    public_base_url: str = "http://localhost:3000"
    max_segment_length: int = Field(default=2900, gt=0, le=3000)
    preview_label: str = "Click here to preview image"


class SlackConfig(BaseModel):
    """Slack app credentials and command name."""

    bot_token: Optional[str] = None
    signing_secret: Optional[str] = None
    command: str = "/ssmgpt"

    @field_validator("command")
    @classmethod
    def command_starts_with_slash(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("Slash command must start with '/'")
        return v


class ServerConfig(BaseModel):
    """HTTP server for Slack events and static assets."""

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    static_dir: Path = Path("public/docx-images")
    static_url_path: str = "/docx-images"
    events_path: str = "/slack/events"


class AppConfig(BaseSettings):
    """Main application configuration.

    Values passed in from the TOML file win over SSMGPT_ environment
    variables, which win over the defaults below.
    """

    model_config = SettingsConfigDict(
        env_prefix="SSMGPT_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    app_name: str = "ssmgpt"
    log_level: LogLevel = LogLevel.INFO
    json_logs: bool = False
    log_file: Optional[Path] = None

    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    formatting: FormattingConfig = Field(default_factory=FormattingConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
