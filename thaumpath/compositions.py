"""Fixed composition table linking compound aspects to their components."""

from __future__ import annotations

from typing import Tuple

from thaumpath.aspects import Aspect
from thaumpath.graph import Graph

Composition = Tuple[Aspect, Aspect, Aspect]

# (composite, component, component)
COMPOSITIONS: Tuple[Composition, ...] = (
    (Aspect.ALIENIS, Aspect.VACUOS, Aspect.TENEBRAE),
    (Aspect.ARBOR, Aspect.AER, Aspect.HERBA),
    (Aspect.AURAM, Aspect.PRAECANTATIO, Aspect.AER),
    (Aspect.BESTIA, Aspect.MOTUS, Aspect.VICTUS),
    (Aspect.CAELUM, Aspect.VITREUS, Aspect.METALLUM),
    (Aspect.COGNITIO, Aspect.IGNIS, Aspect.SPIRITUS),
    (Aspect.CORPUS, Aspect.MORTUUS, Aspect.BESTIA),
    (Aspect.DESIDIA, Aspect.VINCULUM, Aspect.SPIRITUS),
    (Aspect.ELECTRUM, Aspect.POTENTIA, Aspect.MACHINA),
    (Aspect.EXANIMIS, Aspect.MOTUS, Aspect.MORTUUS),
    (Aspect.FABRICO, Aspect.HUMANUS, Aspect.INSTRUMENTUM),
    (Aspect.FAMES, Aspect.VICTUS, Aspect.VACUOS),
    (Aspect.GELUM, Aspect.IGNIS, Aspect.PERDITIO),
    (Aspect.GULA, Aspect.FAMES, Aspect.VACUOS),
    (Aspect.HERBA, Aspect.VICTUS, Aspect.TERRA),
    (Aspect.HUMANUS, Aspect.BESTIA, Aspect.COGNITIO),
    (Aspect.INFERNUS, Aspect.IGNIS, Aspect.PRAECANTATIO),
    (Aspect.INSTRUMENTUM, Aspect.HUMANUS, Aspect.ORDO),
    (Aspect.INVIDIA, Aspect.SENSUS, Aspect.FAMES),
    (Aspect.IRA, Aspect.TELUM, Aspect.IGNIS),
    (Aspect.ITER, Aspect.MOTUS, Aspect.TERRA),
    (Aspect.LIMUS, Aspect.VICTUS, Aspect.AQUA),
    (Aspect.LUCRUM, Aspect.HUMANUS, Aspect.FAMES),
    (Aspect.LUX, Aspect.AER, Aspect.IGNIS),
    (Aspect.LUXURIA, Aspect.CORPUS, Aspect.FAMES),
    (Aspect.MACHINA, Aspect.MOTUS, Aspect.INSTRUMENTUM),
    (Aspect.MAGNETO, Aspect.METALLUM, Aspect.ITER),
    (Aspect.MESSIS, Aspect.HERBA, Aspect.HUMANUS),
    (Aspect.METALLUM, Aspect.TERRA, Aspect.VITREUS),
    (Aspect.METO, Aspect.MESSIS, Aspect.INSTRUMENTUM),
    (Aspect.MORTUUS, Aspect.VICTUS, Aspect.PERDITIO),
    (Aspect.MOTUS, Aspect.AER, Aspect.ORDO),
    (Aspect.NEBRISUM, Aspect.PERFODIO, Aspect.LUCRUM),
    (Aspect.PANNUS, Aspect.INSTRUMENTUM, Aspect.BESTIA),
    (Aspect.PERFODIO, Aspect.HUMANUS, Aspect.TERRA),
    (Aspect.PERMUTATIO, Aspect.PERDITIO, Aspect.ORDO),
    (Aspect.POTENTIA, Aspect.ORDO, Aspect.IGNIS),
    (Aspect.PRAECANTATIO, Aspect.VACUOS, Aspect.POTENTIA),
    (Aspect.RADIO, Aspect.LUX, Aspect.POTENTIA),
    (Aspect.SANO, Aspect.VICTUS, Aspect.ORDO),
    (Aspect.SENSUS, Aspect.AER, Aspect.SPIRITUS),
    (Aspect.SPIRITUS, Aspect.VICTUS, Aspect.MORTUUS),
    (Aspect.STRONTIO, Aspect.COGNITIO, Aspect.PERDITIO),
    (Aspect.SUPERBIA, Aspect.VOLATUS, Aspect.VACUOS),
    (Aspect.TABERNUS, Aspect.TUTAMEN, Aspect.ITER),
    (Aspect.TELUM, Aspect.INSTRUMENTUM, Aspect.IGNIS),
    (Aspect.TEMPESTAS, Aspect.AER, Aspect.AQUA),
    (Aspect.TEMPUS, Aspect.VACUOS, Aspect.ORDO),
    (Aspect.TENEBRAE, Aspect.VACUOS, Aspect.LUX),
    (Aspect.TUTAMEN, Aspect.INSTRUMENTUM, Aspect.TERRA),
    (Aspect.VACUOS, Aspect.AER, Aspect.PERDITIO),
    (Aspect.VENENUM, Aspect.AQUA, Aspect.PERDITIO),
    (Aspect.VICTUS, Aspect.AQUA, Aspect.TERRA),
    (Aspect.VINCULUM, Aspect.MOTUS, Aspect.PERDITIO),
    (Aspect.VITIUM, Aspect.PRAECANTATIO, Aspect.PERDITIO),
    (Aspect.VITREUS, Aspect.TERRA, Aspect.ORDO),
    (Aspect.VOLATUS, Aspect.AER, Aspect.MOTUS),
)


def build_aspect_graph() -> Graph[Aspect]:
    """Build the research graph from :data:`COMPOSITIONS`."""
    return Graph.from_compositions(COMPOSITIONS)
