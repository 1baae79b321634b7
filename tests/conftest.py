"""Test fixtures and factories for building annotated sentences by hand.

Sentences are described as lists of (text, pos, ner) triples; the lemma of
a token defaults to its lowercased text so tests can tell lemma columns
apart from surface-form columns. Mentions are given as (start, end) pairs
in article-global offsets.
"""

from typing import Sequence

import pytest

from nercorpus.schema import Article, Mention, Sentence, Token

ONEWEST_TOKENS = [
    ("OneWest", "NNP", "ORGANIZATION"),
    ("Bank", "NNP", "ORGANIZATION"),
    ("Group", "NNP", "ORGANIZATION"),
    ("LLC", "NNP", "ORGANIZATION"),
    ("was", "VBD", "O"),
    ("founded", "VBN", "O"),
]


def make_sentence(
    tokens: Sequence[tuple[str, str, str]],
    mentions: Sequence[tuple[int, int]] = (),
    offset: int = 0,
) -> Sentence:
    """Build a Sentence whose first token sits at global ``offset``."""
    built = tuple(
        Token(text=text, word=text, pos=pos, lemma=text.lower(), ner=ner, index=i, doc_index=offset + i)
        for i, (text, pos, ner) in enumerate(tokens)
    )
    built_mentions = tuple(
        Mention(start=start, end=end, tokens=built[start - offset:end - offset], ner=built[end - offset - 1].ner)
        for start, end in mentions
    )
    return Sentence(tokens=built, mentions=built_mentions)


def make_article(*sentences: Sentence, article_id: str = "article.txt") -> Article:
    return Article(article_id=article_id, sentences=sentences)


def corenlp_document(sentences: Sequence[dict]) -> dict:
    """Build a CoreNLP JSON document from {"tokens": [...], "mentions": [(begin, end)]} specs.

    Mention offsets are sentence-local, as CoreNLP's tokenBegin/tokenEnd are.
    """
    doc_offset = 0
    out = []
    for s_index, spec in enumerate(sentences):
        tokens = [
            {
                "index": i + 1,
                "word": text,
                "originalText": text,
                "lemma": text.lower(),
                "pos": pos,
                "ner": ner,
            }
            for i, (text, pos, ner) in enumerate(spec["tokens"])
        ]
        mentions = [
            {
                "docTokenBegin": doc_offset + begin,
                "docTokenEnd": doc_offset + end,
                "tokenBegin": begin,
                "tokenEnd": end,
                "text": " ".join(t["originalText"] for t in tokens[begin:end]),
                "ner": tokens[end - 1]["ner"],
            }
            for begin, end in spec.get("mentions", [])
        ]
        out.append({"index": s_index, "tokens": tokens, "entitymentions": mentions})
        doc_offset += len(tokens)
    return {"sentences": out}


@pytest.fixture
def onewest_sentence() -> Sentence:
    """'OneWest Bank Group LLC was founded' with the company as one mention."""
    return make_sentence(ONEWEST_TOKENS, mentions=[(0, 4)])


@pytest.fixture
def onewest_document() -> dict:
    return corenlp_document(
        [
            {"tokens": ONEWEST_TOKENS, "mentions": [(0, 4)]},
            {
                "tokens": [("It", "PRP", "O"), ("moved", "VBD", "O"), ("to", "TO", "O"), ("Pasadena", "NNP", "LOCATION")],
                "mentions": [(3, 4)],
            },
        ]
    )
