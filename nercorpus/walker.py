"""Mention-aware walk over the tokens of one sentence.

Each sentence gets its own MentionCursor, so there is no state shared
between sentences. The walker emits one OutputRow per standalone token and
one merged OutputRow per mention, written when the mention's first token is
visited. The remaining tokens of the mention produce no rows.
"""

import logging
from enum import Enum
from typing import Iterator, NamedTuple, Sequence

from nercorpus.labels import map_ner_label
from nercorpus.schema import Mention, OutputRow, Sentence

logger = logging.getLogger(__name__)

JOIN_SEPARATOR = "/"


class MentionStatus(str, Enum):
    """How a token relates to the mention under the cursor."""

    NOT_A_MENTION = "not_a_mention"
    """Token is outside every mention; it gets its own row."""

    PART_OF_MENTION = "part_of_mention"
    """Token is inside a multi-token mention that is not finished yet."""

    END_OF_MENTION = "end_of_mention"
    """Token closes a mention; the cursor has moved to the next one."""


class Classification(NamedTuple):
    """Result of MentionCursor.classify() for one token."""

    status: MentionStatus
    """Relation of the token to the mention under the cursor."""

    mention: Mention | None = None
    """Set only when the token starts a mention and a merged row is due."""


class MentionCursor:
    """Cursor into the sorted mention list of a single sentence."""

    def __init__(self, mentions: Sequence[Mention]):
        self._mentions = mentions
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self._mentions)

    def classify(self, global_offset: int) -> Classification:
        """Classify the token at ``global_offset`` against the current mention.

        Advances the cursor when the token is the last one of the mention
        (including single-token mentions, which start and end on the same
        token).
        """
        if self.exhausted:
            return Classification(MentionStatus.NOT_A_MENTION)

        mention = self._mentions[self.position]
        start, end = mention.start, mention.end

        if global_offset == start:
            if len(mention.tokens) == 1:
                self.position += 1
                return Classification(MentionStatus.END_OF_MENTION, mention)
            return Classification(MentionStatus.PART_OF_MENTION, mention)
        if global_offset == end - 1:
            self.position += 1
            return Classification(MentionStatus.END_OF_MENTION)
        if start < global_offset < end - 1:
            return Classification(MentionStatus.PART_OF_MENTION)
        return Classification(MentionStatus.NOT_A_MENTION)


def merged_row(sentence_index: int, token_index: int, mention: Mention) -> OutputRow:
    """Build the single row that stands for a whole mention.

    The label comes from the mention's last constituent token.
    """
    return OutputRow(
        sentence_index=sentence_index,
        label=map_ner_label(mention.tokens[-1].ner),
        token_index=token_index,
        pos=JOIN_SEPARATOR.join(t.pos for t in mention.tokens),
        text=JOIN_SEPARATOR.join(t.text for t in mention.tokens),
        merged=True,
    )


class SentenceWalker:
    """Turn one sentence into its output rows.

    ``global_offset`` is the article-global offset of the sentence's first
    token. After rows() is consumed, ``next_offset`` holds the offset of the
    token following the sentence.
    """

    def __init__(self, sentence: Sentence, sentence_index: int, global_offset: int):
        self.sentence = sentence
        self.sentence_index = sentence_index
        self.cursor = MentionCursor(sentence.mentions)
        self.next_offset = global_offset
        self.row_units = 0

    def rows(self) -> Iterator[OutputRow]:
        for token in self.sentence.tokens:
            status, mention = self.cursor.classify(self.next_offset)
            self.next_offset += 1

            if mention is not None:
                yield merged_row(self.sentence_index, self.row_units, mention)

            if status is MentionStatus.NOT_A_MENTION:
                yield OutputRow(
                    sentence_index=self.sentence_index,
                    label=map_ner_label(token.ner),
                    token_index=self.row_units,
                    pos=token.pos,
                    text=token.lemma,
                )
                self.row_units += 1
            elif status is MentionStatus.END_OF_MENTION:
                self.row_units += 1

        if not self.cursor.exhausted:
            logger.debug(
                "Sentence %d: %d mention(s) never reached by the walk",
                self.sentence_index,
                len(self.sentence.mentions) - self.cursor.position,
            )
