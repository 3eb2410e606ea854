"""Source-list categories and their display order and colors."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from amdstats.errors import ConfigurationError


@dataclass(frozen=True)
class Category:
    label: str
    color: Optional[str] = None
    filename: Optional[str] = None


@dataclass(frozen=True)
class CategorySet:
    """Ordered collection of categories.

    The order is the single source of truth for facet and legend ordering
    in every summary table and chart.
    """

    categories: Tuple[Category, ...]

    def __post_init__(self) -> None:
        labels = [category.label for category in self.categories]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate category labels: {', '.join(duplicates)}")

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def __contains__(self, label: object) -> bool:
        return any(category.label == label for category in self.categories)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(category.label for category in self.categories)

    def get(self, label: str) -> Optional[Category]:
        for category in self.categories:
            if category.label == label:
                return category
        return None

    def palette(self) -> Dict[str, str]:
        """Return the label -> color mapping for categories that define a color."""
        return {c.label: c.color for c in self.categories if c.color}

    def extend(self, extra: Iterable[Category]) -> "CategorySet":
        """Return a new set with ``extra`` appended after the existing categories."""
        return CategorySet(self.categories + tuple(extra))

    def check_labels(self, labels: Iterable[str]) -> None:
        """Raise if any of ``labels`` is not a configured category."""
        unknown = sorted({str(label) for label in labels} - set(self.labels))
        if unknown:
            raise ConfigurationError(f"Categories missing from configuration: {', '.join(unknown)}")

    @classmethod
    def from_mapping(cls, colors: Mapping[str, str]) -> "CategorySet":
        """Build a set from an ordered label -> color mapping."""
        return cls(tuple(Category(label=label, color=color) for label, color in colors.items()))


HOST_METAGENOME = Category(
    label="Host Associated Metagenome",
    color="#73cff3",
    filename="ancientmetagenome-hostassociated_samples.tsv",
)
HOST_SINGLE_GENOME = Category(
    label="Host Associated Single Genome",
    color="#f7a52d",
    filename="ancientsinglegenome-hostassociated_samples.tsv",
)
ENVIRONMENTAL_METAGENOME = Category(
    label="Environmental Metagenome",
    color="#7dc97f",
    filename="ancientmetagenome-environmental_samples.tsv",
)
# Not part of the default lists yet; enable with Settings.include_anthropogenic.
ANTHROPOGENIC_METAGENOME = Category(
    label="Anthropogenic Metagenome",
    color="#c07acb",
    filename="ancientmetagenome-anthropogenic_samples.tsv",
)

DEFAULT_CATEGORIES = CategorySet((HOST_METAGENOME, HOST_SINGLE_GENOME, ENVIRONMENTAL_METAGENOME))


def active_categories(include_anthropogenic: bool = False) -> CategorySet:
    if include_anthropogenic:
        return DEFAULT_CATEGORIES.extend([ANTHROPOGENIC_METAGENOME])
    return DEFAULT_CATEGORIES
