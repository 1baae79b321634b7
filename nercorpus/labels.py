"""NER category to corpus label mapping."""

NONE_LABEL = "O"
OTHER_LABEL = "OTHER"

NER_LABEL_MAP: dict[str, str] = {
    "LOCATION": "Loc",
    "ORGANIZATION": "Org",
    "PERSON": "Peop",
    "none": NONE_LABEL,
    "O": NONE_LABEL,
    "": NONE_LABEL,
}


def map_ner_label(category: str | None) -> str:
    """Map a raw NER category to its corpus label.

    Never fails: categories missing from NER_LABEL_MAP become OTHER_LABEL,
    a missing category counts as "no entity".
    """
    if category is None:
        return NONE_LABEL
    return NER_LABEL_MAP.get(category, OTHER_LABEL)
