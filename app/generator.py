import json
import logging
import re
import warnings
from dataclasses import dataclass
from typing import Protocol

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from .config import Settings, settings
from .errors import GenerationError, GenerationLengthWarning
from .schemas import MetaTagDraft

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class LengthPolicy:
    name: str
    min_length: int
    max_length: int
    cut_threshold: int

    @property
    def fallback_length(self) -> int:
        return self.max_length - len(ELLIPSIS)


def title_policy(cfg: Settings = settings) -> LengthPolicy:
    return LengthPolicy("title", cfg.title_min_length, cfg.title_max_length, cfg.title_cut_threshold)


def description_policy(cfg: Settings = settings) -> LengthPolicy:
    return LengthPolicy(
        "description",
        cfg.description_min_length,
        cfg.description_max_length,
        cfg.description_cut_threshold,
    )


def truncate_to_bound(text: str, policy: LengthPolicy) -> str:
    """
    Cut text down to policy.max_length, ending with the ellipsis marker.

    Prefers the start of the last whitespace run that still leaves room for the
    marker, as long as it lies beyond policy.cut_threshold; otherwise keeps a fixed prefix of
    max_length - 3 characters.
    """
    if len(text) <= policy.max_length:
        return text

    hard_cut = text[: policy.max_length]
    window = hard_cut[: policy.fallback_length + 1]
    last_space = -1
    for match in _WHITESPACE_RE.finditer(window):
        last_space = match.start()

    if last_space > policy.cut_threshold:
        return hard_cut[:last_space] + ELLIPSIS
    return hard_cut[: policy.fallback_length] + ELLIPSIS


def enforce_bound(text: str, policy: LengthPolicy, url: str | None = None) -> str:
    text = text.strip()
    where = f" for {url}" if url else ""
    if len(text) > policy.max_length:
        bounded = truncate_to_bound(text, policy)
        logger.warning(
            f"Meta {policy.name}{where} too long ({len(text)} > {policy.max_length}), "
            f"truncated to {len(bounded)} chars"
        )
        return bounded
    if len(text) < policy.min_length:
        message = (
            f"Meta {policy.name}{where} shorter than {policy.min_length} chars "
            f"({len(text)}), kept as is"
        )
        logger.warning(message)
        warnings.warn(message, GenerationLengthWarning, stacklevel=2)
    return text


def enforce_bounds(draft: MetaTagDraft, url: str | None = None, cfg: Settings = settings) -> tuple[str, str]:
    """Apply both length windows to a model draft and return (title, description)."""
    return (
        enforce_bound(draft.title, title_policy(cfg), url),
        enforce_bound(draft.description, description_policy(cfg), url),
    )


def build_prompt(
    text: str,
    title_example: str | None = None,
    description_example: str | None = None,
    cfg: Settings = settings,
) -> str:
    t_min, t_max = cfg.title_min_length, cfg.title_max_length
    d_min, d_max = cfg.description_min_length, cfg.description_max_length

    if title_example:
        title_rules = (
            "Pay close attention to the following example for the meta title's style and tone:\n"
            f"Meta Title Example: {title_example}\n"
            "Generate the new meta title following this example's style. "
            "Do NOT copy the example.\n"
        )
    else:
        title_rules = f"Generate a compelling meta title based on the text content ({t_min}-{t_max} characters).\n"

    if description_example:
        description_rules = (
            "Pay close attention to the following example for the meta description's style, tone, "
            "and use of special characters (like ✓ and ➤):\n"
            f"Meta Description Example: {description_example}\n"
            "Generate the new meta description following this example's style. "
            "Do NOT copy the example.\n"
        )
    else:
        description_rules = (
            f"Generate an engaging meta description based on the text content ({d_min}-{d_max} characters).\n"
        )

    return (
        "You are an SEO expert specializing in creating meta titles and descriptions in German.\n\n"
        "Given the following text content from a URL, generate an SEO-friendly meta title "
        f"(between {t_min} and {t_max} characters) and a meta description "
        f"(between {d_min} and {d_max} characters) in German.\n"
        "The meta title and description should be concise, engaging, and relevant to the content of the page.\n"
        "Both must be in German. Count characters carefully, spaces included.\n\n"
        f"{title_rules}\n"
        f"{description_rules}\n"
        'Output ONLY valid JSON: one object with the string keys "title" and "description".\n\n'
        "Text content:\n"
        f"{text[: cfg.max_input_chars]}\n"
    )


def call_llm(prompt: str, cfg: Settings = settings, client: OpenAI | None = None) -> str:
    api_key = cfg.openai_api_key
    if client is None:
        if not api_key:
            raise GenerationError("OPENAI_API_KEY environment variable not set")
        client = OpenAI(api_key=api_key)

    try:
        response = client.chat.completions.create(
            model=cfg.model_name,
            messages=[
                {"role": "system", "content": "You are a helpful assistant that answers in JSON."},
                {"role": "user", "content": prompt},
            ],
            max_tokens=cfg.max_tokens,
            temperature=cfg.temperature,
            response_format={"type": "json_object"},
        )
    except OpenAIError as e:
        raise GenerationError(f"Language model request failed: {e}") from e
    return response.choices[0].message.content or ""


def parse_llm_response(response_text: str) -> MetaTagDraft:
    """Parse the LLM response into a title/description draft."""
    start = response_text.find("{")
    end = response_text.rfind("}")
    if start == -1 or end <= start:
        raise GenerationError("Language model response contains no JSON object")
    try:
        draft = MetaTagDraft.model_validate(json.loads(response_text[start : end + 1]))
    except (ValueError, ValidationError) as e:
        raise GenerationError(f"Language model response is malformed: {e}") from e
    if not draft.title.strip() or not draft.description.strip():
        raise GenerationError("Language model returned an empty title or description")
    return draft


class MetaTagGenerator(Protocol):
    def generate(
        self,
        text: str,
        title_example: str | None = None,
        description_example: str | None = None,
    ) -> MetaTagDraft: ...


class OpenAIMetaTagGenerator:
    """MetaTagGenerator backed by the OpenAI chat completions API."""

    def __init__(self, cfg: Settings = settings, client: OpenAI | None = None):
        self.settings = cfg
        self._client = client

    def generate(
        self,
        text: str,
        title_example: str | None = None,
        description_example: str | None = None,
    ) -> MetaTagDraft:
        prompt = build_prompt(text, title_example, description_example, cfg=self.settings)
        raw = call_llm(prompt, cfg=self.settings, client=self._client)
        return parse_llm_response(raw)
