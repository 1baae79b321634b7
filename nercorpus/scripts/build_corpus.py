#!/usr/bin/env python3
"""Build a NER training corpus from raw or CoreNLP-annotated articles.

Every input file is one article. Files ending in .json are read as CoreNLP
JSON output; anything else is read as UTF-8 text and annotated by a CoreNLP
server. All inputs are read before the output file is opened, so a missing
or unreadable input leaves no output behind.

Usage:
  python -m nercorpus.scripts.build_corpus relation_final_test.txt -o output.corp
  python -m nercorpus.scripts.build_corpus annotated/*.json --output train.corp
"""

import argparse
import logging
import sys
from contextlib import nullcontext
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Sequence

from nercorpus.config import CorpusConfig, load_corpus_config
from nercorpus.logging import setup_logging
from nercorpus.pipeline import AnnotatorInterface, CoreNLPAnnotator, load_corenlp_json
from nercorpus.schema import Article
from nercorpus.writer import CorpusStats, write_corpus

ANNOTATED_SUFFIX = ".json"


class RawInput(NamedTuple):
    """Article text that still needs annotation."""

    path: Path
    text: str


def read_inputs(paths: Sequence[Path]) -> list[Article | RawInput]:
    """Read every input file up front, keeping the given order."""
    inputs: list[Article | RawInput] = []
    for path in paths:
        if path.suffix.lower() == ANNOTATED_SUFFIX:
            inputs.append(load_corenlp_json(path))
        else:
            inputs.append(RawInput(path, path.read_text(encoding="utf-8")))
    return inputs


def iter_articles(
    inputs: Iterable[Article | RawInput],
    annotator: AnnotatorInterface | None,
) -> Iterator[Article]:
    for item in inputs:
        if isinstance(item, Article):
            yield item
            continue
        if annotator is None:
            raise RuntimeError(f"No annotator available for raw input {item.path}")
        yield annotator.annotate_article(str(item.path), item.text)


def build_corpus(
    paths: Sequence[Path],
    config: CorpusConfig,
    annotator: AnnotatorInterface | None = None,
) -> CorpusStats:
    """Read ``paths``, annotate raw text if needed, and write the corpus.

    When ``annotator`` is not given and some input is raw text, a
    CoreNLPAnnotator is created from ``config.corenlp`` for the duration of
    the build.
    """
    inputs = read_inputs(paths)
    needs_annotation = any(isinstance(item, RawInput) for item in inputs)

    if annotator is None and needs_annotation:
        context = CoreNLPAnnotator(config.corenlp)
    else:
        context = nullcontext(annotator)

    with context as active:
        return write_corpus(iter_articles(inputs, active), config.output)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert annotated articles into a tab-separated NER training corpus.",
    )
    parser.add_argument(
        "inputs",
        type=Path,
        nargs="+",
        help="Article files: UTF-8 text, or CoreNLP JSON output (*.json)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Corpus file to write (default: from config, else output.corp)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to nercorpus.toml (default: $NERCORPUS_CONFIG, then ./nercorpus.toml)",
    )
    parser.add_argument(
        "--regexner-mapping",
        type=Path,
        default=None,
        help="RegexNER mapping file passed to CoreNLP",
    )
    parser.add_argument(
        "--corenlp-endpoint",
        default=None,
        help="CoreNLP server URL (default: http://localhost:9000)",
    )
    parser.add_argument(
        "--no-start-server",
        action="store_true",
        help="Use an already running CoreNLP server instead of launching one",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    return parser.parse_args(argv)


def _apply_overrides(config: CorpusConfig, args: argparse.Namespace) -> CorpusConfig:
    corenlp_updates: dict = {}
    if args.regexner_mapping is not None:
        corenlp_updates["regexner_mapping"] = args.regexner_mapping
    if args.corenlp_endpoint is not None:
        corenlp_updates["endpoint"] = args.corenlp_endpoint
    if args.no_start_server:
        corenlp_updates["start_server"] = False

    updates: dict = {}
    if args.output is not None:
        updates["output"] = args.output
    if corenlp_updates:
        updates["corenlp"] = {**config.corenlp.model_dump(), **corenlp_updates}
    if not updates:
        return config
    return CorpusConfig.model_validate({**config.model_dump(), **updates})


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logger = setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, name="nercorpus")

    try:
        config = _apply_overrides(load_corpus_config(args.config), args)
    except (OSError, ValueError) as e:
        logger.error(f"Error: cannot load config: {e}")
        return 1
    logger.debug(config)

    try:
        stats = build_corpus(args.inputs, config)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error(f"Error: {e}")
        return 1

    print(
        f"Corpus done: {stats.sentences} sentences, {stats.rows} rows "
        f"({stats.merged_mentions} merged mentions) -> {config.output}",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
