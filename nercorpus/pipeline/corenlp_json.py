"""Read Stanford CoreNLP JSON output into Sentence objects.

This is the format produced by ``-outputFormat json`` on the command line
and by the server when asked for JSON:

    {"sentences": [
        {"index": 0,
         "tokens": [{"index": 1, "word": "OneWest", "originalText": "OneWest",
                     "lemma": "OneWest", "pos": "NNP", "ner": "ORGANIZATION"}, ...],
         "entitymentions": [{"docTokenBegin": 0, "docTokenEnd": 4,
                             "tokenBegin": 0, "tokenEnd": 4,
                             "text": "OneWest Bank Group LLC", "ner": "ORGANIZATION"}]}]}

Token offsets are recomputed while reading: ``index`` counts from zero
within each sentence and ``doc_index`` counts from zero across the
document.
"""

import json
import logging
from pathlib import Path
from typing import Any

from nercorpus.schema import Article, Mention, Sentence, Token

logger = logging.getLogger(__name__)


def _token_from_json(data: dict[str, Any], index: int, doc_index: int) -> Token:
    word = data.get("word")
    text = data.get("originalText") or word
    if text is None:
        raise ValueError(f"token {doc_index} has neither 'originalText' nor 'word'")
    return Token(
        text=text,
        word=word,
        pos=data.get("pos", ""),
        lemma=data.get("lemma", text),
        ner=data.get("ner") or "O",
        index=index,
        doc_index=doc_index,
    )


def _mention_from_json(data: dict[str, Any], tokens: tuple[Token, ...], sentence_offset: int) -> Mention:
    if "tokenBegin" in data:
        begin, end = data["tokenBegin"], data["tokenEnd"]
    else:
        begin, end = data["docTokenBegin"] - sentence_offset, data["docTokenEnd"] - sentence_offset
    return Mention(
        start=sentence_offset + begin,
        end=sentence_offset + end,
        tokens=tokens[begin:end],
        ner=data.get("ner"),
        text=data.get("text"),
    )


def sentences_from_corenlp_json(data: dict[str, Any]) -> list[Sentence]:
    """Convert a parsed CoreNLP JSON document to sentences.

    Mentions are sorted by start offset; overlap is not checked.

    Raises:
        ValueError: If the document has no ``sentences`` list or a mention
            does not fit its sentence.
    """
    raw_sentences = data.get("sentences")
    if not isinstance(raw_sentences, list):
        raise ValueError("CoreNLP document has no 'sentences' list")

    sentences: list[Sentence] = []
    doc_index = 0
    for raw in raw_sentences:
        sentence_offset = doc_index
        tokens = []
        for index, raw_token in enumerate(raw.get("tokens", [])):
            tokens.append(_token_from_json(raw_token, index, doc_index))
            doc_index += 1
        token_tuple = tuple(tokens)
        mentions = sorted(
            (_mention_from_json(m, token_tuple, sentence_offset) for m in raw.get("entitymentions", [])),
            key=lambda m: m.start,
        )
        sentences.append(Sentence(tokens=token_tuple, mentions=tuple(mentions)))
    logger.debug("Converted %d sentences (%d tokens)", len(sentences), doc_index)
    return sentences


def load_corenlp_json(path: Path | str) -> Article:
    """Read a CoreNLP JSON file as one Article identified by its path."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return Article(article_id=str(path), sentences=tuple(sentences_from_corenlp_json(data)))
