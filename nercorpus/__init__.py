"""
NER training corpus builder.

Turns CoreNLP-annotated articles into the nine-column, tab-separated
corpus format used to train a sequence tagger. Multi-token entity mentions
are merged into a single row (e.g. ``OneWest/Bank/Group/LLC``).

    from nercorpus import write_corpus
    from nercorpus.pipeline import load_corenlp_json

    write_corpus([load_corenlp_json("article.json")], "output.corp")
"""

from nercorpus.config import CoreNLPSettings, CorpusConfig, load_corpus_config
from nercorpus.labels import NER_LABEL_MAP, map_ner_label
from nercorpus.schema import Article, Mention, OutputRow, Sentence, Token
from nercorpus.walker import MentionCursor, MentionStatus, SentenceWalker
from nercorpus.writer import CorpusEmitter, CorpusStats, format_row, write_corpus

__all__ = [
    "Article",
    "CoreNLPSettings",
    "CorpusConfig",
    "CorpusEmitter",
    "CorpusStats",
    "Mention",
    "MentionCursor",
    "MentionStatus",
    "NER_LABEL_MAP",
    "OutputRow",
    "Sentence",
    "SentenceWalker",
    "Token",
    "format_row",
    "load_corpus_config",
    "map_ner_label",
    "write_corpus",
]

__version__ = "0.1.0"
