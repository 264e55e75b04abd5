"""Rewrite oracle protocol."""

from typing import Protocol, Sequence, runtime_checkable

from ..entities.guideline_set import GuidelineSet
from ..entities.paragraph import Paragraph


@runtime_checkable
class RewriteOracle(Protocol):
    """External text-rewriting capability.

    Implementations may be slow and may fail; they never retry on their own.
    """

    async def rewrite(
        self,
        paragraphs: Sequence[Paragraph],
        guidelines: GuidelineSet,
    ) -> list[Paragraph]:
        """Rewrite paragraphs according to the guidelines.

        The result has the same length as ``paragraphs`` and carries the same
        ids in the same order.

        Raises:
            OracleUnavailableError: If the upstream service failed.
            OracleMalformedResponseError: If the output is structurally invalid.
        """
        ...

    async def summarize(self, paragraphs: Sequence[Paragraph]) -> str:
        """Summarize the paragraphs into one short paragraph."""
        ...
