from typing import Dict, List, Sequence

import pandas as pd

from .args import PURUSHAS, VACANAS, Lakara, TinPada
from .lipi import Lipi, remove_svaras
from .paradigm_builder import Cell

# Traditional lakara names, in SLP1.
LAKARA_TITLES = {
    Lakara.Lat: "law",
    Lakara.Lit: "liw",
    Lakara.Lut: "luw",
    Lakara.Lrt: "lfw",
    Lakara.Let: "lew",
    Lakara.Lot: "low",
    Lakara.Lan: "laN",
    Lakara.VidhiLin: "viDi-liN",
    Lakara.AshirLin: "ASIr-liN",
    Lakara.Lun: "luN",
    Lakara.Lrn: "lfN",
}


def deva(lipi: Lipi, s: str, script: str) -> str:
    """Render SLP1 text in `script`."""
    return lipi.transliterate(s, "slp1", script)


def deva_no_svara(lipi: Lipi, s: str, script: str) -> str:
    return deva(lipi, remove_svaras(s), script)


def lakara_title(lipi: Lipi, lakara: Lakara, script: str) -> str:
    return deva(lipi, LAKARA_TITLES[lakara], script)


def entry_string(lipi: Lipi, entries: Sequence, script: str) -> str:
    return deva(lipi, ", ".join(x.text for x in entries), script)


def sutra_text(lipi: Lipi, sutras: Dict[str, str], rule: str, script: str) -> str:
    text = sutras.get(rule)
    return deva(lipi, text, script) if text else ""


def paradigm_frame(lipi: Lipi, paradigm: List[Cell], script: str) -> pd.DataFrame:
    """Lay a nine-cell paradigm out as purusha rows x vacana columns."""
    rows = []
    for i in range(len(PURUSHAS)):
        row = paradigm[i * len(VACANAS):(i + 1) * len(VACANAS)]
        rows.append([entry_string(lipi, cell, script) for cell in row])
    return pd.DataFrame(
        rows,
        index=[p.name for p in PURUSHAS],
        columns=[v.name for v in VACANAS],
    )


def prakriya_frame(lipi: Lipi, sutras: Dict[str, str], prakriya, script: str) -> pd.DataFrame:
    records = [
        {
            "rule": step.rule,
            "sutra": sutra_text(lipi, sutras, step.rule, script),
            "result": deva(lipi, step.result, script),
        }
        for step in prakriya.history
    ]
    return pd.DataFrame(records, columns=["rule", "sutra", "result"])


def cell_padas(paradigm: List[Cell]) -> List[TinPada]:
    return [p for cell in paradigm for p in cell]
