from __future__ import annotations

import json
import re
from pathlib import Path

from .provider import TaxonomyProvider


class LocalTaxonomy(TaxonomyProvider):
    def __init__(
        self,
        acronyms_path: str | Path | None = None,
        catalog_path: str | Path | None = None,
    ) -> None:
        acronyms = Path(acronyms_path) if acronyms_path else Path(__file__).with_name("acronyms.json")
        catalog = Path(catalog_path) if catalog_path else Path(__file__).with_name("skill_catalog.json")
        self._acronyms = self._load_acronyms(acronyms)
        self._terms = self._load_catalog(catalog)

    @staticmethod
    def _load_acronyms(path: Path) -> dict[str, str]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        return {str(key).strip().lower(): str(value) for key, value in raw.items()}

    @staticmethod
    def _load_catalog(path: Path) -> tuple[str, ...]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        terms: list[str] = []
        seen: set[str] = set()
        for group in raw.values():
            for term in group:
                key = re.sub(r"\s+", " ", str(term)).strip().lower()
                if key and key not in seen:
                    seen.add(key)
                    terms.append(key)
        return tuple(terms)

    def acronyms(self) -> dict[str, str]:
        return dict(self._acronyms)

    def skill_terms(self) -> tuple[str, ...]:
        return self._terms
