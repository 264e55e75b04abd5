"""Image search protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ImageSearch(Protocol):

    async def find_image(self, query: str) -> str:
        """Return the URL of the best matching image, or ``""`` if none.

        Lookup failures are not errors; they also yield ``""``.
        """
        ...
