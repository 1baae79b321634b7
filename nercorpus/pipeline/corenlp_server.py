"""Annotate raw text with a Stanford CoreNLP server through stanza.

stanza is imported only when an annotator is constructed, so reading
pre-annotated JSON does not need it installed or a Java runtime around.

Typical usage:
    ```python
    settings = CoreNLPSettings(regexner_mapping=Path("jg-regexner.txt"))
    with CoreNLPAnnotator(settings) as annotator:
        article = annotator.annotate_article("news.txt", text)
    ```
"""

import logging
from typing import Any

from nercorpus.config import CoreNLPSettings
from nercorpus.pipeline.corenlp_json import sentences_from_corenlp_json
from nercorpus.pipeline.interfaces import AnnotatorInterface
from nercorpus.schema import Sentence

logger = logging.getLogger(__name__)


def _client_errors() -> tuple[type[Exception], ...]:
    """Exceptions stanza's client raises for server and request failures."""
    from stanza.server.client import AnnotationException, PermanentlyFailedException, TimeoutException

    return (AnnotationException, TimeoutException, PermanentlyFailedException)


class CoreNLPAnnotator(AnnotatorInterface):
    """AnnotatorInterface backed by stanza's CoreNLPClient.

    The client (and, with ``start_server``, the Java server process) lives
    as long as the ``with`` block; annotate() outside of it raises
    RuntimeError. Server start-up and annotation failures reported by stanza
    are re-raised as RuntimeError.
    """

    def __init__(self, settings: CoreNLPSettings | None = None, client: Any = None):
        self.settings = settings or CoreNLPSettings()
        self._client = client
        self._owns_client = client is None

    def _make_client(self) -> Any:
        from stanza.server import CoreNLPClient, StartServer

        settings = self.settings
        start_server = StartServer.TRY_START if settings.start_server else StartServer.DONT_START
        logger.info(
            "Starting CoreNLP client at %s with annotators %s",
            settings.endpoint,
            ",".join(settings.effective_annotators()),
        )
        return CoreNLPClient(
            annotators=",".join(settings.effective_annotators()),
            properties=settings.corenlp_properties(),
            endpoint=settings.endpoint,
            memory=settings.memory,
            timeout=settings.timeout,
            start_server=start_server,
            output_format="json",
            be_quiet=True,
        )

    def __enter__(self) -> "CoreNLPAnnotator":
        if self._client is None:
            self._client = self._make_client()
        if self._owns_client:
            try:
                self._client.start()
            except _client_errors() as e:
                self._client = None
                raise RuntimeError(f"CoreNLP server at {self.settings.endpoint} failed to start: {e}") from e
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._owns_client and self._client is not None:
            self._client.stop()
            self._client = None

    def annotate(self, text: str) -> list[Sentence]:
        if self._client is None:
            raise RuntimeError("CoreNLPAnnotator must be used inside a 'with' block")
        try:
            data = self._client.annotate(
                text,
                properties=self.settings.corenlp_properties(),
                output_format="json",
            )
        except _client_errors() as e:
            raise RuntimeError(f"CoreNLP annotation failed: {e}") from e
        return sentences_from_corenlp_json(data)
