from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from kapa_docs.app.upstream.contracts import NormalizedResponse, SourceEntry

SOURCES_HEADING = "**Sources:**"
UNCERTAIN_ANSWER_WARNING = (
    "> **Note:** The documentation assistant is not fully certain about this "
    "answer. Please verify it against the linked sources."
)
UNCERTAIN_SOLUTION_WARNING = (
    "> **Note:** This solution may be incomplete. Check each step against the "
    "official documentation before applying it."
)


@dataclass(frozen=True)
class RenderStyle:
    heading: str | None = None
    uncertainty_warning: str = UNCERTAIN_ANSWER_WARNING
    show_thread_id: bool = True


def is_displayable_url(url: str) -> bool:
    parsed = urlparse(url.strip())
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def displayable_sources(sources: tuple[SourceEntry, ...]) -> list[SourceEntry]:
    return [source for source in sources if is_displayable_url(source.url)]


def display_title(title: str) -> str:
    if "|" not in title:
        return title.strip() or "Documentation"
    parts = title.split("|")
    page_title = parts[0].strip()
    section_title = parts[1].strip()
    if section_title and section_title != page_title:
        return f"{page_title} - {section_title}"
    return page_title


def render_sources(sources: tuple[SourceEntry, ...]) -> str | None:
    visible = displayable_sources(sources)
    if not visible:
        return None
    lines = [
        f"{index}. [{display_title(source.title)}]({source.url.strip()})"
        for index, source in enumerate(visible, start=1)
    ]
    return "\n".join([SOURCES_HEADING, *lines])


def render_response(response: NormalizedResponse, style: RenderStyle) -> str:
    blocks: list[str] = []
    if style.heading:
        blocks.append(style.heading)
    blocks.append(response.answer)
    if response.is_uncertain:
        blocks.append(style.uncertainty_warning)
    sources_block = render_sources(response.sources)
    if sources_block:
        blocks.append(sources_block)
    if style.show_thread_id and response.thread_id:
        blocks.append(f"_Thread ID: {response.thread_id}_")
    return "\n\n".join(blocks)
