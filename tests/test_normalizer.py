import pytest

from kapa_docs.app.upstream.contracts import NormalizedResponse, SourceEntry
from kapa_docs.app.upstream.normalizer import normalize


def test_normalize_reads_current_kapa_payload() -> None:
    response = normalize(
        {
            "answer": "Use the Content-Type Builder.",
            "thread_id": "thread-1",
            "question_answer_id": "qa-1",
            "is_uncertain": False,
            "relevant_sources": [
                {
                    "title": "CTB|Fields",
                    "source_url": "https://docs.example/ctb",
                    "contains_internal_data": False,
                }
            ],
        }
    )

    assert response.answer == "Use the Content-Type Builder."
    assert response.sources == (
        SourceEntry(title="CTB|Fields", url="https://docs.example/ctb", snippet=""),
    )
    assert response.thread_id == "thread-1"
    assert response.question_answer_id == "qa-1"
    assert response.is_uncertain is False
    assert response.confidence == 0.8


def test_normalize_missing_answer_uses_placeholder() -> None:
    response = normalize({"relevant_sources": []})

    assert response.answer == "No answer available"


@pytest.mark.parametrize("raw", [None, "text", 42, ["answer"]])
def test_normalize_non_object_payload_yields_defaults(raw: object) -> None:
    assert normalize(raw) == NormalizedResponse()


def test_normalize_falls_back_to_legacy_source_fields() -> None:
    response = normalize(
        {
            "answer": "ok",
            "sources": [
                {"name": "Legacy", "url": "https://docs.example/legacy", "content": "body"},
                {"excerpt": "only excerpt"},
            ],
        }
    )

    assert response.sources == (
        SourceEntry(title="Legacy", url="https://docs.example/legacy", snippet="body"),
        SourceEntry(title="Documentation", url="#", snippet="only excerpt"),
    )


def test_normalize_prefers_relevant_sources_over_sources() -> None:
    response = normalize(
        {
            "relevant_sources": [{"title": "New", "source_url": "https://a.example"}],
            "sources": [{"title": "Old", "url": "https://b.example"}],
        }
    )

    assert [source.title for source in response.sources] == ["New"]


def test_normalize_coerces_malformed_source_entries() -> None:
    response = normalize(
        {"relevant_sources": ["not-an-object", {"title": 7, "source_url": None}]}
    )

    assert response.sources == (SourceEntry(), SourceEntry())


def test_normalize_ignores_non_list_sources() -> None:
    assert normalize({"relevant_sources": "broken"}).sources == tuple()


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"confidence": 0.93}, 0.93),
        ({"confidence": 0}, 0.0),
        ({"confidence": 4}, 1.0),
        ({"confidence": -1}, 0.0),
        ({"is_uncertain": True}, 0.5),
        ({"is_uncertain": False}, 0.8),
        ({"confidence": "high"}, 0.8),
        ({"confidence": True, "is_uncertain": True}, 0.5),
        ({"confidence": float("nan")}, 0.8),
    ],
)
def test_normalize_confidence_resolution(payload: dict, expected: float) -> None:
    assert normalize(payload).confidence == expected


def test_normalize_only_literal_true_marks_uncertain() -> None:
    assert normalize({"is_uncertain": "yes"}).is_uncertain is False
    assert normalize({"is_uncertain": True}).is_uncertain is True
