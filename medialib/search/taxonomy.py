# Semantic taxonomy: an ordered, read-only category -> keywords table.
# Loaded once per process and shared by the match, scoring and tagging stages.

from __future__ import annotations

import os
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

import yaml

from medialib.settings import settings

DEFAULT_TAXONOMY_PATH = os.path.join(os.path.dirname(__file__), "taxonomy.yaml")


class Taxonomy:
    """Immutable mapping of category name to its keyword tuple, in file order."""

    def __init__(self, categories: Mapping[str, Tuple[str, ...]]):
        self._categories = MappingProxyType(dict(categories))

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __getitem__(self, category: str) -> Tuple[str, ...]:
        return self._categories[category]

    def items(self):
        return self._categories.items()

    @classmethod
    def from_yaml(cls, path: str) -> "Taxonomy":
        if not os.path.exists(path):
            raise FileNotFoundError(f"taxonomy file not found at {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"taxonomy file must map categories to keyword lists: {path}")
        categories = {}
        for name, keywords in data.items():
            categories[str(name).lower()] = tuple(str(k).lower() for k in (keywords or []))
        return cls(categories)


@lru_cache(maxsize=4)
def load_taxonomy(path: Optional[str] = None) -> Taxonomy:
    """Return the process-wide taxonomy (bundled YAML unless overridden)."""
    return Taxonomy.from_yaml(path or settings.TAXONOMY_PATH or DEFAULT_TAXONOMY_PATH)
