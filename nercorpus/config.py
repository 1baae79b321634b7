"""Load corpus build settings from TOML (e.g. nercorpus.toml).

Config file is looked up in order:
  1. Path in NERCORPUS_CONFIG env var (if set)
  2. nercorpus.toml in the current working directory

If no file is found, built-in defaults are used. Settings live under a
``[corpus]`` table and, for the annotation server, ``[corenlp]``:

    [corpus]
    output = "output.corp"

    [corenlp]
    annotators = ["tokenize", "ssplit", "pos", "lemma", "ner", "regexner", "entitymentions"]
    regexner_mapping = "jg-regexner.txt"
    memory = "4G"
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NERCORPUS_CONFIG"
CONFIG_FILENAME = "nercorpus.toml"

DEFAULT_OUTPUT = Path("output.corp")
DEFAULT_ANNOTATORS = ("tokenize", "ssplit", "pos", "lemma", "ner", "regexner", "entitymentions")


class CoreNLPSettings(BaseModel):
    """Options for the CoreNLP annotation server."""

    model_config = {"frozen": True}

    annotators: tuple[str, ...] = Field(default=DEFAULT_ANNOTATORS)
    regexner_mapping: Path | None = Field(
        default=None,
        description="RegexNER mapping file; regexner is dropped from the annotators when unset.",
    )
    endpoint: str = Field(default="http://localhost:9000")
    memory: str = Field(default="4G")
    timeout: int = Field(default=60000, gt=0, description="Per-request timeout in milliseconds.")
    start_server: bool = Field(default=True, description="Launch a local server instead of using a running one.")
    properties: dict[str, str] = Field(default_factory=dict, description="Extra CoreNLP properties.")

    def effective_annotators(self) -> list[str]:
        if self.regexner_mapping is None:
            return [a for a in self.annotators if a != "regexner"]
        return list(self.annotators)

    def corenlp_properties(self) -> dict[str, str]:
        props = {"annotators": ",".join(self.effective_annotators())}
        if self.regexner_mapping is not None:
            props["regexner.mapping"] = str(self.regexner_mapping)
        props.update(self.properties)
        return props


class CorpusConfig(BaseModel):
    """Everything a corpus build needs besides the input files."""

    model_config = {"frozen": True}

    output: Path = Field(default=DEFAULT_OUTPUT, description="Corpus file to write.")
    corenlp: CoreNLPSettings = Field(default_factory=CoreNLPSettings)


def _default_config_paths() -> list[Path]:
    """Return paths to check for nercorpus.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]))
    paths.append(Path.cwd() / CONFIG_FILENAME)
    return paths


def _from_toml(data: dict[str, Any]) -> CorpusConfig:
    values: dict[str, Any] = {}
    corpus = data.get("corpus")
    if isinstance(corpus, dict) and "output" in corpus:
        values["output"] = corpus["output"]
    corenlp = data.get("corenlp")
    if isinstance(corenlp, dict):
        values["corenlp"] = corenlp
    return CorpusConfig.model_validate(values)


def load_corpus_config(path: Path | None = None) -> CorpusConfig:
    """Load the corpus config.

    An explicit ``path`` must exist and parse; files found through the
    default lookup are skipped with a warning when they cannot be read.

    Raises:
        FileNotFoundError: If ``path`` is given and does not exist.
        tomllib.TOMLDecodeError: If ``path`` is given and is not valid TOML.
    """
    if path is not None:
        with open(path, "rb") as f:
            return _from_toml(tomllib.load(f))
    for candidate in _default_config_paths():
        if candidate.is_file():
            try:
                with open(candidate, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable config %s: %s", candidate, e)
                continue
            logger.debug("Loaded config from %s", candidate)
            return _from_toml(data)
    return CorpusConfig()
