from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    def acronyms(self) -> dict[str, str]:
        """Return the lower-case term to canonical casing dictionary."""

    def skill_terms(self) -> tuple[str, ...]:
        """Return every catalogued skill term, lower-case."""
