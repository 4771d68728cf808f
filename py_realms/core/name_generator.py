"""
Medieval-style territory names built from syllable tables.

Each name comes from its own generator seeded with the name seed: one draw
picks the structure, then one index is drawn into each of the prefix, middle
and suffix tables (all three are always drawn):

- r < 0.6: prefix + middle + suffix
- r < 0.9: prefix + suffix
- else:    prefix + middle
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog

from ..config import settings
from ..exceptions import NameExhaustionError
from .seeded_random import SeededRandom

logger = structlog.get_logger()

PREFIXES = (
    "Ald", "Bal", "Cor", "Dun", "Eld", "Fal", "Gar", "Hil", "Kal", "Lor",
    "Mor", "Nor", "Ost", "Pel", "Quen", "Rav", "Sil", "Thal", "Val", "Wel",
    "Wyn", "Xer", "Yor", "Zar", "Bran", "Crim", "Drak", "Eber", "Frey", "Glen",
)

MIDDLES = (
    "dor", "mar", "wen", "thor", "var", "len", "dan", "kel", "rin", "mor",
    "wyn", "dal", "gar", "ven", "ton", "burg", "ham", "shire", "dale", "wood",
    "mer", "son", "ter", "den", "ford", "mont", "vale", "ridge", "stone", "haven",
)

SUFFIXES = (
    "ia", "or", "en", "ar", "on", "us", "um", "land", "mark", "reich",
    "dom", "hold", "stead", "ton", "field", "mere", "moor", "crest", "peak", "watch",
)

FULL_NAME_THRESHOLD = 0.6
SHORT_NAME_THRESHOLD = 0.9


class NameGenerator:
    """Syllable-table name generator."""

    def __init__(
        self,
        prefixes: Sequence[str] = PREFIXES,
        middles: Sequence[str] = MIDDLES,
        suffixes: Sequence[str] = SUFFIXES,
    ):
        if not prefixes or not middles or not suffixes:
            raise ValueError("Syllable tables must not be empty")
        self.prefixes = tuple(prefixes)
        self.middles = tuple(middles)
        self.suffixes = tuple(suffixes)

    @property
    def max_distinct_names(self) -> int:
        """Upper bound on distinct names the tables can produce."""
        p, m, s = len(self.prefixes), len(self.middles), len(self.suffixes)
        return p * m * s + p * s + p * m

    def generate_name(self, seed: int) -> str:
        """Generate the name for a single seed."""
        rng = SeededRandom(seed)
        structure, rng = rng.next()
        prefix_idx, rng = rng.choice_index(len(self.prefixes))
        middle_idx, rng = rng.choice_index(len(self.middles))
        suffix_idx, rng = rng.choice_index(len(self.suffixes))

        prefix = self.prefixes[prefix_idx]
        middle = self.middles[middle_idx]
        suffix = self.suffixes[suffix_idx]

        if structure < FULL_NAME_THRESHOLD:
            return prefix + middle + suffix
        elif structure < SHORT_NAME_THRESHOLD:
            return prefix + suffix
        return prefix + middle

    def generate_unique_names(
        self, count: int, base_seed: int, max_attempts: Optional[int] = None
    ) -> List[str]:
        """
        Generate ``count`` distinct names from consecutive seeds.

        Seeds ``base_seed, base_seed + 1, ...`` are tried in turn; names are
        kept in the order they were first produced.

        Args:
            count: Number of names wanted
            base_seed: Seed of the first attempt
            max_attempts: Attempt limit, ``count`` times
                ``settings.name_attempts_per_territory`` by default

        Returns:
            List of ``count`` unique names

        Raises:
            NameExhaustionError: if the tables cannot produce ``count`` distinct
                names, or the limit is hit before ``count`` names are found
        """
        if count <= 0:
            return []
        if count > self.max_distinct_names:
            logger.error(
                "Name tables too small",
                requested=count,
                max_distinct_names=self.max_distinct_names,
            )
            raise NameExhaustionError(count, 0, 0)
        if max_attempts is None:
            max_attempts = count * settings.name_attempts_per_territory

        names: List[str] = []
        seen = set()
        seed = base_seed
        attempts = 0

        while len(names) < count:
            if attempts >= max_attempts:
                logger.error(
                    "Name generation exhausted",
                    requested=count,
                    collected=len(names),
                    attempts=attempts,
                )
                raise NameExhaustionError(count, len(names), attempts)

            name = self.generate_name(seed)
            if name not in seen:
                seen.add(name)
                names.append(name)
            seed += 1
            attempts += 1

        logger.debug("Territory names generated", count=count, attempts=attempts)
        return names


def generate_territory_name(seed: int) -> str:
    """Generate a name with the default syllable tables."""
    return NameGenerator().generate_name(seed)


def generate_territory_names(
    count: int, base_seed: int, max_attempts: Optional[int] = None
) -> List[str]:
    """Generate ``count`` unique names with the default syllable tables."""
    return NameGenerator().generate_unique_names(count, base_seed, max_attempts)
