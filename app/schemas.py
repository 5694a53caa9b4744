from typing import Literal

from pydantic import BaseModel, Field

ERROR_TITLE = "Error processing"
ERROR_DESCRIPTION = "Failed to generate meta tags"


class GenerationRequest(BaseModel):
    url: str = Field(..., min_length=1)
    title_example: str | None = None
    description_example: str | None = None


class MetaTagDraft(BaseModel):
    """Raw title/description pair as returned by the model."""

    title: str
    description: str


class GenerationResult(BaseModel):
    url: str
    meta_title: str
    meta_description: str
    error: str | None = None

    @classmethod
    def failed(cls, url: str, error: str) -> "GenerationResult":
        return cls(
            url=url,
            meta_title=ERROR_TITLE,
            meta_description=ERROR_DESCRIPTION,
            error=error,
        )


class BatchOutcome(BaseModel):
    status: Literal["complete", "partially complete"]
    results: list[GenerationResult]
    failed: int = 0
    message: str = ""


class GenerateBatchRequest(BaseModel):
    urls: list[str] | str
    title_example: str | None = None
    description_example: str | None = None


class ExportRequest(BaseModel):
    results: list[GenerationResult]
    filename: str | None = None
