from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .args import (
    AVYAYA_KRTS, DHATU_PADAS, LAKARAS, NOMINAL_KRTS, PARTICIPLE_KRTS, PURUSHAS, VACANAS,
    BaseKrt, Dhatu, DhatuPada, GenerationOptions, KrtPada, Lakara, Pada, Prakriya,
    Prayoga, Sanadi, TinPada,
)
from .vyakarana import Vyakarana

# One cell of a paradigm: distinct texts, first occurrence kept.
Cell = List[TinPada]


@dataclass(slots=True)
class KrdantaGroup:
    title: str
    padas: List[KrtPada]


@dataclass(slots=True)
class LakaraRow:
    lakara: Lakara
    paradigms: Dict[DhatuPada, List[Cell]] = field(default_factory=dict)


def create_krdantas_from(
    vyakarana: Vyakarana,
    dhatu: Dhatu,
    upasarga: Optional[str],
    sanadi: Optional[Sanadi],
    krts: Sequence[BaseKrt],
) -> List[KrdantaGroup]:
    results = []
    for krt in krts:
        prakriyas = vyakarana.derive_krdantas(dhatu.code, krt, sanadi, upasarga)
        padas = [
            KrtPada(text=p.text, dhatu=dhatu, krt=krt, sanadi=sanadi, upasarga=upasarga)
            for p in prakriyas
        ]
        results.append(KrdantaGroup(title=krt.name, padas=padas))
    return results


def create_krdantas(
    vyakarana: Vyakarana,
    dhatu: Optional[Dhatu],
    options: GenerationOptions,
) -> List[List[KrdantaGroup]]:
    """Nominal, participle and avyaya krdantas for `dhatu`, in that order."""
    if dhatu is None:
        return []
    upasarga = options.upasarga or None
    return [
        create_krdantas_from(vyakarana, dhatu, upasarga, options.sanadi, krts)
        for krts in (NOMINAL_KRTS, PARTICIPLE_KRTS, AVYAYA_KRTS)
    ]


def create_paradigm(
    vyakarana: Vyakarana,
    dhatu: Dhatu,
    lakara: Lakara,
    prayoga: Prayoga,
    pada: Optional[DhatuPada],
    sanadi: Optional[Sanadi],
    upasarga: Optional[str],
) -> List[Cell]:
    """All nine purusha x vacana cells, or [] if any cell is empty.

    Cells are ordered purusha-major, vacana-minor.
    """
    paradigm: List[Cell] = []
    for purusha in PURUSHAS:
        for vacana in VACANAS:
            prakriyas = vyakarana.derive_tinantas(
                dhatu.code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga,
            )
            cell: Cell = []
            seen = set()
            for p in prakriyas:
                if p.text in seen:
                    continue
                seen.add(p.text)
                cell.append(TinPada(
                    text=p.text,
                    dhatu=dhatu,
                    lakara=lakara,
                    prayoga=prayoga,
                    purusha=purusha,
                    vacana=vacana,
                    pada=pada,
                    sanadi=sanadi,
                    upasarga=upasarga,
                ))
            # A paradigm with a gap is not shown at all.
            if not cell:
                return []
            paradigm.append(cell)
    return paradigm


def create_tinantas(
    vyakarana: Vyakarana,
    dhatu: Optional[Dhatu],
    options: GenerationOptions,
) -> List[LakaraRow]:
    if dhatu is None:
        return []
    prayoga = options.prayoga if options.prayoga is not None else Prayoga.Kartari
    padas = [options.dhatu_pada] if options.dhatu_pada is not None else DHATU_PADAS
    upasarga = options.upasarga or None

    results = []
    for lakara in LAKARAS:
        row = LakaraRow(lakara=lakara)
        for pada in padas:
            paradigm = create_paradigm(
                vyakarana, dhatu, lakara, prayoga, pada, options.sanadi, upasarga,
            )
            if paradigm:
                row.paradigms[pada] = paradigm
        results.append(row)
    return results


def create_prakriya(vyakarana: Vyakarana, pada: Optional[Pada]) -> Optional[Prakriya]:
    """Re-derive `pada` and return the prakriya that produced its text."""
    if pada is None:
        return None
    if isinstance(pada, TinPada):
        prakriyas = vyakarana.derive_tinantas(
            pada.dhatu.code,
            pada.lakara,
            pada.prayoga,
            pada.purusha,
            pada.vacana,
            None,
            pada.sanadi,
            pada.upasarga,
        )
    elif isinstance(pada, KrtPada):
        prakriyas = vyakarana.derive_krdantas(
            pada.dhatu.code, pada.krt, pada.sanadi, pada.upasarga,
        )
    else:
        return None
    return next((p for p in prakriyas if p.text == pada.text), None)
