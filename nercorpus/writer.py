"""Serialize annotated articles into the tab-separated training corpus.

The corpus has one nine-column row per standalone token or merged mention
and two blank lines after every sentence:

    0	Org	0	O	NNP/NNP/NNP/NNP	OneWest/Bank/Group/LLC	O	O	O
    0	O	1	O	VBD	be	O	O	O

Lines are produced lazily, so nothing but the current sentence is held in
memory while writing.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator

from pydantic import BaseModel, Field

from nercorpus.schema import Article, OutputRow
from nercorpus.walker import SentenceWalker

logger = logging.getLogger(__name__)

COLUMN_SEPARATOR = "\t"
SENTENCE_SEPARATOR_LINES = 2


def format_row(row: OutputRow) -> str:
    """Render a row as nine tab-separated fields, without a line terminator."""
    return COLUMN_SEPARATOR.join(row.columns())


class CorpusStats(BaseModel):
    """Counters collected while emitting a corpus."""

    articles: int = Field(default=0, ge=0)
    sentences: int = Field(default=0, ge=0)
    tokens: int = Field(default=0, ge=0)
    rows: int = Field(default=0, ge=0)
    merged_mentions: int = Field(default=0, ge=0)


class CorpusEmitter:
    """Walk articles sentence by sentence and yield corpus lines.

    The sentence index keeps counting across articles; the global token
    offset restarts at zero for every article, since mention spans are
    expressed in per-article coordinates.
    """

    def __init__(self) -> None:
        self.stats = CorpusStats()

    def iter_rows(self, articles: Iterable[Article]) -> Iterator[OutputRow | None]:
        """Yield rows, with ``None`` marking the end of each sentence."""
        for article in articles:
            self.stats.articles += 1
            logger.debug("Emitting article %s (%d sentences)", article.article_id, len(article.sentences))
            global_offset = 0
            for sentence in article.sentences:
                walker = SentenceWalker(sentence, self.stats.sentences, global_offset)
                for row in walker.rows():
                    self.stats.rows += 1
                    if row.merged:
                        self.stats.merged_mentions += 1
                    yield row
                global_offset = walker.next_offset
                self.stats.tokens += len(sentence.tokens)
                self.stats.sentences += 1
                yield None

    def iter_lines(self, articles: Iterable[Article]) -> Iterator[str]:
        """Yield corpus lines without terminators; blank strings separate sentences."""
        for row in self.iter_rows(articles):
            if row is None:
                for _ in range(SENTENCE_SEPARATOR_LINES):
                    yield ""
            else:
                yield format_row(row)


def write_corpus(articles: Iterable[Article], output_path: Path | str) -> CorpusStats:
    """Write the corpus for ``articles`` to ``output_path``.

    The file is always closed, also when writing fails; the error is then
    re-raised to the caller and the file may be incomplete.
    """
    output_path = Path(output_path)
    emitter = CorpusEmitter()
    with open(output_path, "w", encoding="utf-8", newline="\n") as sink:
        for line in emitter.iter_lines(articles):
            sink.write(line)
            sink.write("\n")
    logger.info(
        "Wrote %d rows for %d sentences to %s",
        emitter.stats.rows,
        emitter.stats.sentences,
        output_path,
    )
    return emitter.stats
