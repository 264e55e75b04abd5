"""Helpers shared by everything that handles paragraph sequences."""

from typing import Sequence

from ..entities.paragraph import Paragraph
from ..errors import OracleMalformedResponseError

PARAGRAPH_SEPARATOR = "\n\n"


def join_texts(texts: Sequence[str]) -> str:
    return PARAGRAPH_SEPARATOR.join(texts)


def join_paragraphs(paragraphs: Sequence[Paragraph]) -> str:
    """Concatenate paragraph texts in order."""
    return join_texts([p.text for p in paragraphs])


def ensure_aligned(
    original: Sequence[Paragraph],
    rewritten: Sequence[Paragraph],
) -> list[Paragraph]:
    """Check that a rewrite kept paragraph count, ids and order.

    Returns:
        list[Paragraph]: ``rewritten`` as a list.

    Raises:
        OracleMalformedResponseError: On any count, id or order mismatch.
    """
    if len(rewritten) != len(original):
        raise OracleMalformedResponseError(
            "Rewrite returned a different number of paragraphs",
            details=f"expected {len(original)}, got {len(rewritten)}",
        )
    for position, (before, after) in enumerate(zip(original, rewritten)):
        if before.id != after.id:
            raise OracleMalformedResponseError(
                "Rewrite changed paragraph ids or order",
                details=f"position {position}: expected id {before.id}, got {after.id}",
            )
    return list(rewritten)
