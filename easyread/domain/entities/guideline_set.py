"""Guideline set passed to the rewrite oracle."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GuidelineSet:
    """Natural-language instructions derived from a reading profile."""

    instructions: tuple[str, ...]
    known_topics: tuple[str, ...] = field(default_factory=tuple)

    def render(self) -> str:
        """Render the guidelines as the profile block of a prompt."""
        topics = ", ".join(self.known_topics)
        return (
            f"- 읽기 프로필: {' '.join(self.instructions)}\n"
            f"- 자신 있는 분야: [{topics}]"
        )
