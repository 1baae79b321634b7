"""Data model for annotated sentences and corpus rows.

Everything here is produced once by the annotation pipeline (or by the
walker, for rows) and read afterwards, so all models are frozen.
"""

from pydantic import BaseModel, Field, model_validator

PLACEHOLDER = "O"
"""Literal written to every placeholder column of an output row."""


class Token(BaseModel):
    """A single annotated token."""

    model_config = {"frozen": True}

    text: str = Field(description="Original surface form as it appeared in the input.")
    word: str | None = Field(
        default=None,
        description="Normalized token form, if the annotator distinguishes it from the surface form.",
    )
    pos: str = Field(description="Part-of-speech tag.")
    lemma: str = Field(description="Dictionary base form.")
    ner: str = Field(
        default="O",
        description="Named-entity category as reported by the annotator ('O' for none).",
    )
    index: int = Field(ge=0, description="Position within the containing sentence.")
    doc_index: int = Field(ge=0, description="Position within the containing article.")


class Mention(BaseModel):
    """A contiguous span of tokens detected as one named entity.

    ``start`` and ``end`` (exclusive) are article-global token offsets.
    """

    model_config = {"frozen": True}

    start: int = Field(ge=0, description="Global offset of the first token in the span.")
    end: int = Field(gt=0, description="Global offset one past the last token in the span.")
    tokens: tuple[Token, ...] = Field(description="Constituent tokens in order.")
    ner: str | None = Field(default=None, description="Span-level category reported upstream.")
    text: str | None = Field(default=None, description="Span text reported upstream.")

    @model_validator(mode="after")
    def _check_span(self) -> "Mention":
        if self.end <= self.start:
            raise ValueError(f"mention end {self.end} must be greater than start {self.start}")
        if len(self.tokens) != self.end - self.start:
            raise ValueError(
                f"mention [{self.start}, {self.end}) spans {self.end - self.start} tokens "
                f"but carries {len(self.tokens)}"
            )
        return self

    def __len__(self) -> int:
        return len(self.tokens)


class Sentence(BaseModel):
    """Ordered tokens plus the mentions detected in them."""

    model_config = {"frozen": True}

    tokens: tuple[Token, ...] = Field(default=(), description="Tokens in sentence order.")
    mentions: tuple[Mention, ...] = Field(
        default=(),
        description="Mentions sorted by start offset; assumed non-overlapping.",
    )


class Article(BaseModel):
    """One annotated input document."""

    model_config = {"frozen": True}

    article_id: str = Field(description="Identifier of the source, usually its file path.")
    sentences: tuple[Sentence, ...] = Field(default=(), description="Sentences in document order.")

    @property
    def token_count(self) -> int:
        return sum(len(s.tokens) for s in self.sentences)


class OutputRow(BaseModel):
    """One line of the training corpus: a standalone token or a merged mention."""

    model_config = {"frozen": True}

    sentence_index: int = Field(ge=0)
    label: str = Field(description="Mapped NER label (Loc, Org, Peop, O, OTHER).")
    token_index: int = Field(ge=0, description="Local row-unit index within the sentence.")
    pos: str = Field(description="POS tag, or slash-joined tags for a merged mention.")
    text: str = Field(description="Lemma, or slash-joined surface forms for a merged mention.")
    merged: bool = Field(default=False, description="Whether the row covers a whole mention.")

    def columns(self) -> list[str]:
        """Return the nine output columns in file order."""
        return [
            str(self.sentence_index),
            self.label,
            str(self.token_index),
            PLACEHOLDER,
            self.pos,
            self.text,
            PLACEHOLDER,
            PLACEHOLDER,
            PLACEHOLDER,
        ]
