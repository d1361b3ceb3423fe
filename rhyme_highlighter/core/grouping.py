"""Rhyme grouping and palette assignment."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from .syllables import SyllableInstance

DEFAULT_PALETTE: Tuple[str, ...] = (
    "#ffb347",  # orange
    "#77dd77",  # green
    "#aec6cf",  # blue
    "#f49ac2",  # pink
    "#b39eb5",  # purple
    "#fff68f",  # yellow
    "#ff6961",  # red
    "#03c03c",  # teal
    "#779ecb",  # light blue
    "#966fd6",  # violet
    "#f7cac9",  # light pink
    "#cfcfc4",  # light gray
    "#b284be",  # lavender
    "#c23b22",  # brick red
    "#03a89e",  # turquoise
    "#fdfd96",  # pale yellow
)

_HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class RhymeGroup:
    """Syllable instances sharing one rhyme key, in document order."""

    key: str
    members: Tuple[SyllableInstance, ...]

    @property
    def first_offset(self) -> int:
        return self.members[0].char_start


def validate_palette(colors: Iterable[str]) -> Tuple[str, ...]:
    """Return ``colors`` as a tuple, rejecting empty or non ``#rrggbb`` input."""

    palette = tuple(str(color).strip() for color in colors)
    if not palette:
        raise ValueError("Palette must contain at least one color")
    invalid = [color for color in palette if not _HEX_COLOR_PATTERN.match(color)]
    if invalid:
        raise ValueError(f"Invalid palette colors: {', '.join(invalid)}")
    return palette


def group_by_rhyme_key(instances: Iterable[SyllableInstance]) -> List[RhymeGroup]:
    """Partition ``instances`` by key and keep groups with two or more members.

    Groups come back ordered by the scan position of their first member,
    which is also the order colors are handed out in.
    """

    buckets: Dict[str, List[SyllableInstance]] = {}
    for instance in instances:
        # dict preserves first-insertion order of keys.
        buckets.setdefault(instance.rhyme_key, []).append(instance)
    return [
        RhymeGroup(key, tuple(members))
        for key, members in buckets.items()
        if len(members) >= 2
    ]


def assign_colors(
    groups: Sequence[RhymeGroup],
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> Dict[str, str]:
    """Give the i-th group ``palette[i % len(palette)]``."""

    if not palette:
        raise ValueError("Palette must contain at least one color")
    return {group.key: palette[index % len(palette)] for index, group in enumerate(groups)}


__all__ = [
    "DEFAULT_PALETTE",
    "RhymeGroup",
    "assign_colors",
    "group_by_rhyme_key",
    "validate_palette",
]
