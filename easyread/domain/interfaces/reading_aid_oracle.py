"""Reading aid oracle protocol."""

from typing import Protocol, Sequence, runtime_checkable

from ..entities.glossary import TermCandidate, TermDefinition
from ..entities.question import PreReadingQuestion


@runtime_checkable
class ReadingAidOracle(Protocol):
    """External language model producing material that helps a reader.

    Like the rewrite oracle, implementations may be slow and may fail.
    """

    async def generate_questions(self, text: str) -> list[PreReadingQuestion]:
        """Generate yes/no questions about the reader's background.

        Raises:
            OracleUnavailableError: If the upstream service failed.
            OracleMalformedResponseError: If the output is structurally invalid.
        """
        ...

    async def extract_terms(
        self,
        text: str,
        known_topics: Sequence[str],
        tags: Sequence[str],
    ) -> list[TermCandidate]:
        """Pick hard or domain-specific terms, each tagged with one of ``tags``."""
        ...

    async def define_term(
        self,
        term: str,
        context: str,
        known_topics: Sequence[str],
    ) -> TermDefinition:
        """Define ``term`` as it is used in the ``context`` sentence."""
        ...
