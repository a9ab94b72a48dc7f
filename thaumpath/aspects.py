"""
ThaumPath Repository
Introductory remarks: This module is part of the ThaumPath codebase.

Closed catalog of Thaumcraft aspects with name resolution helpers.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

from rapidfuzz.distance import Levenshtein


class Aspect(Enum):
    """One aspect of the fixed research vocabulary.

    The member value is the display name. A few aspects are stored in save
    files under a different key; :attr:`key` returns that serialized form.
    """

    AER = "aer"
    ALIENIS = "alienis"
    AQUA = "aqua"
    ARBOR = "arbor"
    AURAM = "auram"
    BESTIA = "bestia"
    CAELUM = "caelum"
    COGNITIO = "cognitio"
    CORPUS = "corpus"
    DESIDIA = "desidia"
    ELECTRUM = "electrum"
    EXANIMIS = "exanimis"
    FABRICO = "fabrico"
    FAMES = "fames"
    GELUM = "gelum"
    GLORIA = "gloria"
    GULA = "gula"
    HERBA = "herba"
    HUMANUS = "humanus"
    IGNIS = "ignis"
    INFERNUS = "infernus"
    INSTRUMENTUM = "instrumentum"
    INVIDIA = "invidia"
    IRA = "ira"
    ITER = "iter"
    LIMUS = "limus"
    LUCRUM = "lucrum"
    LUX = "lux"
    LUXURIA = "luxuria"
    MACHINA = "machina"
    MAGNETO = "magneto"
    MESSIS = "messis"
    METALLUM = "metallum"
    METO = "meto"
    MORTUUS = "mortuus"
    MOTUS = "motus"
    NEBRISUM = "nebrisum"
    ORDO = "ordo"
    PANNUS = "pannus"
    PERDITIO = "perditio"
    PERFODIO = "perfodio"
    PERMUTATIO = "permutatio"
    POTENTIA = "potentia"
    PRAECANTATIO = "praecantatio"
    PRIMORDIUM = "primordium"
    RADIO = "radio"
    SANO = "sano"
    SENSUS = "sensus"
    SPIRITUS = "spiritus"
    STRONTIO = "strontio"
    SUPERBIA = "superbia"
    TABERNUS = "tabernus"
    TELUM = "telum"
    TEMPESTAS = "tempestas"
    TEMPUS = "tempus"
    TENEBRAE = "tenebrae"
    TERRA = "terra"
    TUTAMEN = "tutamen"
    VACUOS = "vacuos"
    VENENUM = "venenum"
    VICTUS = "victus"
    VINCULUM = "vinculum"
    VITIUM = "vitium"
    VITREUS = "vitreus"
    VOLATUS = "volatus"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Capitalised name used when printing paths."""
        return self.value.capitalize()

    @property
    def key(self) -> str:
        """Key under which the aspect is stored in research save data."""
        return _KEY_OVERRIDES.get(self, self.value)

    @classmethod
    def by_key(cls, key: str) -> Optional["Aspect"]:
        """Resolve a serialized key, ignoring case."""
        return _BY_KEY.get(key.lower())

    @classmethod
    def fuzzy_match(cls, text: str) -> Optional["AspectMatch"]:
        """Return the closest aspect by normalized Levenshtein similarity.

        Only a strictly higher score replaces the running best, so ties keep
        the aspect that comes first in catalog order. Text sharing nothing
        with any display name (score ``0.0`` everywhere) yields ``None``.
        """
        candidate = text.lower()
        highest_score = 0.0
        best_match: Optional[Aspect] = None
        for aspect in ALL_ASPECTS:
            score = Levenshtein.normalized_similarity(
                aspect.display_name, candidate
            )
            if score > highest_score:
                highest_score = score
                best_match = aspect

        if best_match is None:
            return None
        return AspectMatch(best_match, highest_score)

    def __repr__(self) -> str:
        return self.label

    def __str__(self) -> str:
        return self.label


class AspectMatch(NamedTuple):
    """Fuzzy lookup outcome: the aspect and its similarity in ``[0, 1]``."""

    aspect: Aspect
    score: float

    @property
    def exact(self) -> bool:
        return self.score >= 1.0


_KEY_OVERRIDES: Dict[Aspect, str] = {
    Aspect.PRIMORDIUM: "custom3",
    Aspect.GLORIA: "custom5",
}

ALL_ASPECTS: Tuple[Aspect, ...] = tuple(Aspect)

_BY_KEY: Dict[str, Aspect] = {aspect.key: aspect for aspect in ALL_ASPECTS}


def all_aspects() -> Tuple[Aspect, ...]:
    """Return every aspect in stable catalog order."""
    return ALL_ASPECTS
