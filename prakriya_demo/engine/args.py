from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Union


class Lakara(IntEnum):
    Lat = 0
    Lit = 1
    Lut = 2
    Lrt = 3
    Let = 4
    Lot = 5
    Lan = 6
    VidhiLin = 7
    AshirLin = 8
    Lun = 9
    Lrn = 10


class Prayoga(IntEnum):
    Kartari = 0
    Karmani = 1
    Bhave = 2


class DhatuPada(IntEnum):
    Parasmai = 0
    Atmane = 1


class Purusha(IntEnum):
    Prathama = 0
    Madhyama = 1
    Uttama = 2


class Vacana(IntEnum):
    Eka = 0
    Dvi = 1
    Bahu = 2


class Sanadi(IntEnum):
    san = 0
    Ric = 1
    yaN = 2
    yaNluk = 3


class BaseKrt(IntEnum):
    GaY = 0
    lyuw = 1
    Rvul = 2
    tfc = 3
    kvip = 4
    tavya = 5
    anIyar = 6
    yat = 7
    Ryat = 8
    Satf = 9
    SAnac = 10
    kta = 11
    ktavatu = 12
    kvasu = 13
    kAnac = 14
    tumun = 15
    ktvA = 16
    Ramul = 17


# Axis order for every table. Grids and restoration depend on these, not on
# enum iteration.
LAKARAS = [
    Lakara.Lat, Lakara.Lit, Lakara.Lut, Lakara.Lrt, Lakara.Let, Lakara.Lot,
    Lakara.Lan, Lakara.VidhiLin, Lakara.AshirLin, Lakara.Lun, Lakara.Lrn,
]
PRAYOGAS = [Prayoga.Kartari, Prayoga.Karmani, Prayoga.Bhave]
DHATU_PADAS = [DhatuPada.Parasmai, DhatuPada.Atmane]
PURUSHAS = [Purusha.Prathama, Purusha.Madhyama, Purusha.Uttama]
VACANAS = [Vacana.Eka, Vacana.Dvi, Vacana.Bahu]
SANADIS = [Sanadi.san, Sanadi.Ric, Sanadi.yaN, Sanadi.yaNluk]

# Krts that create ordinary nouns.
NOMINAL_KRTS = [BaseKrt.GaY, BaseKrt.lyuw, BaseKrt.Rvul, BaseKrt.tfc, BaseKrt.kvip]

# Krts that are generally called participles.
PARTICIPLE_KRTS = [
    BaseKrt.tavya, BaseKrt.anIyar, BaseKrt.yat, BaseKrt.Ryat,
    BaseKrt.Satf, BaseKrt.SAnac,
    BaseKrt.kta, BaseKrt.ktavatu,
    BaseKrt.kvasu, BaseKrt.kAnac,
]

# Krts that create avyayas.
AVYAYA_KRTS = [BaseKrt.tumun, BaseKrt.ktvA, BaseKrt.Ramul]

TIN_TAB = "tin"
KRT_TAB = "krt"
TABS = [TIN_TAB, KRT_TAB]


@dataclass(slots=True, frozen=True)
class Dhatu:
    """A dhatupatha entry. `query` is `upadesha` without svara marks."""
    code: str
    upadesha: str
    query: str
    artha: str


@dataclass(slots=True, frozen=True)
class GenerationOptions:
    prayoga: Optional[Prayoga] = None
    dhatu_pada: Optional[DhatuPada] = None
    upasarga: Optional[str] = None
    sanadi: Optional[Sanadi] = None


@dataclass(slots=True, frozen=True)
class Step:
    rule: str
    result: str = ""


@dataclass(slots=True, frozen=True)
class Prakriya:
    text: str
    history: List[Step] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class TinPada:
    text: str
    dhatu: Dhatu
    lakara: Lakara
    prayoga: Prayoga
    purusha: Purusha
    vacana: Vacana
    pada: Optional[DhatuPada] = None
    sanadi: Optional[Sanadi] = None
    upasarga: Optional[str] = None


@dataclass(slots=True, frozen=True)
class KrtPada:
    text: str
    dhatu: Dhatu
    krt: BaseKrt
    sanadi: Optional[Sanadi] = None
    upasarga: Optional[str] = None


Pada = Union[TinPada, KrtPada]


def pada_tab(pada: Pada) -> str:
    """The tab a pada is shown on."""
    return KRT_TAB if isinstance(pada, KrtPada) else TIN_TAB
