import logging
from typing import TypedDict

from langgraph.graph import END, START, StateGraph

from .config import Settings, settings
from .errors import EmptyContentError, ExtractionError, GenerationError
from .generator import MetaTagGenerator, enforce_bounds
from .reader import ReaderClient
from .schemas import MetaTagDraft

logger = logging.getLogger(__name__)


class PipelineState(TypedDict, total=False):
    url: str
    title_example: str | None
    description_example: str | None
    text: str
    draft: MetaTagDraft
    meta_title: str
    meta_description: str
    error: str
    error_type: str


def _fail(state: PipelineState, error: Exception) -> PipelineState:
    state["error"] = str(error)
    state["error_type"] = type(error).__name__
    return state


def build_pipeline_graph(reader: ReaderClient, generator: MetaTagGenerator, cfg: Settings = settings):
    """Compile the extract -> generate -> enforce pipeline for a single URL."""

    def extract_node(state: PipelineState) -> PipelineState:
        url = state["url"]
        try:
            text = reader.extract(url)
        except ExtractionError as e:
            return _fail(state, e)
        if not text or not text.strip():
            return _fail(state, EmptyContentError(url, f"Failed to scrape text from URL: {url}"))
        state["text"] = text
        return state

    def generate_node(state: PipelineState) -> PipelineState:
        try:
            state["draft"] = generator.generate(
                state["text"],
                title_example=state.get("title_example") or None,
                description_example=state.get("description_example") or None,
            )
        except GenerationError as e:
            return _fail(state, e)
        return state

    def enforce_node(state: PipelineState) -> PipelineState:
        title, description = enforce_bounds(state["draft"], url=state["url"], cfg=cfg)
        state["meta_title"] = title
        state["meta_description"] = description
        return state

    def route_after(state: PipelineState) -> str:
        return "failed" if state.get("error") else "ok"

    workflow = StateGraph(PipelineState)
    workflow.add_node("extract", extract_node)
    workflow.add_node("generate", generate_node)
    workflow.add_node("enforce", enforce_node)

    workflow.add_edge(START, "extract")
    workflow.add_conditional_edges("extract", route_after, {"ok": "generate", "failed": END})
    workflow.add_conditional_edges("generate", route_after, {"ok": "enforce", "failed": END})
    workflow.add_edge("enforce", END)

    return workflow.compile()
