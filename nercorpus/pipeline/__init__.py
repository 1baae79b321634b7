"""Adapters between the annotation pipeline and the corpus emitter."""

from nercorpus.pipeline.corenlp_json import load_corenlp_json, sentences_from_corenlp_json
from nercorpus.pipeline.corenlp_server import CoreNLPAnnotator
from nercorpus.pipeline.interfaces import AnnotatorInterface

__all__ = [
    "AnnotatorInterface",
    "CoreNLPAnnotator",
    "load_corenlp_json",
    "sentences_from_corenlp_json",
]
