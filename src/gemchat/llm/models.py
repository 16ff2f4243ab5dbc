from pydantic import BaseModel, ConfigDict, Field


class CompletionResponse(BaseModel):
    """Response from a completion service."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content, empty if none")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
