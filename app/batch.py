"""Sequential batch processing of URLs with per-URL error isolation."""

import logging
from typing import Iterable

from pydantic import ValidationError

from .agent_graph import build_pipeline_graph
from .config import Settings, settings
from .generator import MetaTagGenerator
from .reader import ReaderClient
from .schemas import BatchOutcome, GenerationRequest, GenerationResult

logger = logging.getLogger(__name__)

TITLE_EXAMPLE_SOFT_CAP = 59
DESCRIPTION_EXAMPLE_SOFT_CAP = 159


def parse_url_list(raw: str) -> list[str]:
    """Split a newline separated URL list, keeping only entries starting with http."""
    urls = [line.strip() for line in raw.splitlines()]
    return [u for u in urls if u and u.startswith("http")]


def _clean_example(value: str | None, soft_cap: int, label: str) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if len(value) > soft_cap:
        logger.info(f"{label} example is {len(value)} chars, above the suggested {soft_cap}")
    return value


class BatchRunner:
    def __init__(self, reader: ReaderClient, generator: MetaTagGenerator, cfg: Settings = settings):
        self.settings = cfg
        self.graph = build_pipeline_graph(reader, generator, cfg)

    def process_url(self, request: GenerationRequest) -> GenerationResult:
        """Run one request through the pipeline; never raises."""
        url = request.url
        logger.info(f"Processing URL: {url}")
        try:
            final_state = self.graph.invoke({
                "url": url,
                "title_example": request.title_example,
                "description_example": request.description_example,
            })
        except Exception as e:
            logger.exception(f"Error processing URL {url}")
            return GenerationResult.failed(url, str(e))

        if final_state.get("error"):
            logger.error(f"Error processing URL {url} ({final_state.get('error_type')}): {final_state['error']}")
            return GenerationResult.failed(url, final_state["error"])

        logger.info(f"Successfully processed: {url}")
        return GenerationResult(
            url=url,
            meta_title=final_state["meta_title"],
            meta_description=final_state["meta_description"],
        )

    def run(
        self,
        urls: Iterable[str],
        title_example: str | None = None,
        description_example: str | None = None,
    ) -> BatchOutcome:
        urls = list(urls)
        if not urls:
            raise ValueError("No valid URLs: enter at least one URL starting with http or https")

        title_example = _clean_example(title_example, TITLE_EXAMPLE_SOFT_CAP, "Title")
        description_example = _clean_example(description_example, DESCRIPTION_EXAMPLE_SOFT_CAP, "Description")

        results: list[GenerationResult] = []
        for url in urls:
            try:
                request = GenerationRequest(
                    url=url,
                    title_example=title_example,
                    description_example=description_example,
                )
            except ValidationError as e:
                logger.error(f"Invalid request for URL {url!r}: {e}")
                results.append(GenerationResult.failed(url, "Invalid URL"))
                continue
            results.append(self.process_url(request))

        failed = sum(1 for r in results if r.error is not None)
        if failed:
            status = "partially complete"
            message = f"Processing partially complete: {failed} of {len(results)} URLs failed."
        else:
            status = "complete"
            message = f"Meta tags generated for {len(results)} URLs."
        logger.info(message)
        return BatchOutcome(status=status, results=results, failed=failed, message=message)
