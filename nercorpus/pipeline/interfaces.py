"""Interface between the corpus emitter and the annotation pipeline.

The emitter never annotates text itself. An annotator takes raw article
text and returns sentences whose tokens carry POS, lemma and NER
attributes, with detected mentions expressed in article-global token
offsets.
"""

from abc import ABC, abstractmethod

from nercorpus.schema import Article, Sentence


class AnnotatorInterface(ABC):
    """Annotate raw text into Sentence objects.

    Implementations must number tokens from zero for every call, so each
    call corresponds to one article.
    """

    @abstractmethod
    def annotate(self, text: str) -> list[Sentence]:
        """Annotate one article.

        Args:
            text: Full article text.

        Returns:
            Sentences in document order. Mentions inside a sentence must be
            sorted by start offset and must not overlap.
        """

    def annotate_article(self, article_id: str, text: str) -> Article:
        """Annotate ``text`` and wrap the result as an Article."""
        return Article(article_id=article_id, sentences=tuple(self.annotate(text)))
