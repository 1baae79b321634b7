"""Tests for the CoreNLP server annotator, using a stand-in client."""

from pathlib import Path

import pytest
from stanza.server.client import AnnotationException, PermanentlyFailedException, TimeoutException

from nercorpus.config import CoreNLPSettings
from nercorpus.pipeline.corenlp_server import CoreNLPAnnotator


class FakeClient:
    """Records calls the way CoreNLPClient would receive them."""

    def __init__(self, document: dict):
        self.document = document
        self.calls: list[dict] = []
        self.started = 0
        self.stopped = 0

    def start(self) -> None:
        self.started += 1

    def stop(self) -> None:
        self.stopped += 1

    def annotate(self, text: str, properties: dict | None = None, output_format: str | None = None) -> dict:
        self.calls.append({"text": text, "properties": properties, "output_format": output_format})
        return self.document


class TestCoreNLPAnnotator:
    def test_annotate_requests_json(self, onewest_document: dict) -> None:
        client = FakeClient(onewest_document)
        annotator = CoreNLPAnnotator(client=client)
        sentences = annotator.annotate("OneWest Bank Group LLC was founded. It moved to Pasadena.")
        assert len(sentences) == 2
        assert client.calls[0]["output_format"] == "json"
        assert client.calls[0]["properties"]["annotators"] == "tokenize,ssplit,pos,lemma,ner,entitymentions"

    def test_regexner_mapping_forwarded(self, onewest_document: dict) -> None:
        client = FakeClient(onewest_document)
        settings = CoreNLPSettings(regexner_mapping=Path("jg-regexner.txt"))
        CoreNLPAnnotator(settings, client=client).annotate("text")
        props = client.calls[0]["properties"]
        assert "regexner" in props["annotators"].split(",")
        assert props["regexner.mapping"] == "jg-regexner.txt"

    def test_annotate_article(self, onewest_document: dict) -> None:
        annotator = CoreNLPAnnotator(client=FakeClient(onewest_document))
        article = annotator.annotate_article("news.txt", "text")
        assert article.article_id == "news.txt"
        assert article.token_count == 10

    def test_injected_client_is_not_started(self, onewest_document: dict) -> None:
        client = FakeClient(onewest_document)
        with CoreNLPAnnotator(client=client):
            pass
        assert client.started == 0
        assert client.stopped == 0

    def test_owned_client_started_and_stopped(self, onewest_document: dict, monkeypatch: pytest.MonkeyPatch) -> None:
        client = FakeClient(onewest_document)
        monkeypatch.setattr(CoreNLPAnnotator, "_make_client", lambda self: client)
        with pytest.raises(RuntimeError, match="boom"):
            with CoreNLPAnnotator() as annotator:
                annotator.annotate("text")
                raise RuntimeError("boom")
        assert client.started == 1
        assert client.stopped == 1

    def test_annotate_outside_context_fails(self) -> None:
        with pytest.raises(RuntimeError, match="with"):
            CoreNLPAnnotator().annotate("text")


class FailingClient(FakeClient):
    """Fails the way an unreachable or overloaded server does."""

    def __init__(self, start_error: Exception | None = None, annotate_error: Exception | None = None):
        super().__init__({"sentences": []})
        self.start_error = start_error
        self.annotate_error = annotate_error

    def start(self) -> None:
        super().start()
        if self.start_error is not None:
            raise self.start_error

    def annotate(self, text: str, properties: dict | None = None, output_format: str | None = None) -> dict:
        if self.annotate_error is not None:
            raise self.annotate_error
        return super().annotate(text, properties, output_format)


class TestCoreNLPAnnotatorFailures:
    """stanza client errors surface as RuntimeError."""

    def test_annotation_error_wrapped(self) -> None:
        client = FailingClient(annotate_error=AnnotationException("server unreachable"))
        with pytest.raises(RuntimeError, match="server unreachable") as excinfo:
            CoreNLPAnnotator(client=client).annotate("text")
        assert isinstance(excinfo.value.__cause__, AnnotationException)

    def test_timeout_wrapped(self) -> None:
        client = FailingClient(annotate_error=TimeoutException("timed out"))
        with pytest.raises(RuntimeError, match="timed out"):
            CoreNLPAnnotator(client=client).annotate("text")

    def test_start_failure_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        client = FailingClient(start_error=PermanentlyFailedException("no java"))
        monkeypatch.setattr(CoreNLPAnnotator, "_make_client", lambda self: client)
        annotator = CoreNLPAnnotator()
        with pytest.raises(RuntimeError, match="failed to start"):
            with annotator:
                pass
        assert client.started == 1
        with pytest.raises(RuntimeError, match="with"):
            annotator.annotate("text")
