import csv
import importlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .args import (
    BaseKrt, DhatuPada, Lakara, Prakriya, Prayoga, Purusha, Sanadi, Step, Vacana,
)
from .settings import FORMS_PATH, VYAKARANA_FACTORY

FORM_COLUMNS = [
    "type", "dhatu", "lakara", "prayoga", "purusha", "vacana", "pada",
    "krt", "sanadi", "upasarga", "text", "steps",
]


class Vyakarana(ABC):
    """Contract of the derivation engine.

    Both methods are pure: the same arguments always give the same
    sequence of prakriyas, so callers re-derive instead of caching.
    """

    @abstractmethod
    def derive_krdantas(
        self,
        code: str,
        krt: BaseKrt,
        sanadi: Optional[Sanadi],
        upasarga: Optional[str],
    ) -> Sequence[Prakriya]: ...

    @abstractmethod
    def derive_tinantas(
        self,
        code: str,
        lakara: Lakara,
        prayoga: Prayoga,
        purusha: Purusha,
        vacana: Vacana,
        pada: Optional[DhatuPada],
        sanadi: Optional[Sanadi],
        upasarga: Optional[str],
    ) -> Sequence[Prakriya]: ...


def _clean_cell(val) -> Optional[str]:
    if pd.isna(val):
        return None
    s = str(val).strip()
    return s if s != "" else None


def _enum(cls, val):
    s = _clean_cell(val)
    return None if s is None else cls[s]


def parse_steps(cell) -> List[Step]:
    """`rule=result;rule=result` -> steps. The result part is optional."""
    s = _clean_cell(cell)
    if s is None:
        return []
    steps = []
    for part in s.split(";"):
        part = part.strip()
        if part == "":
            continue
        rule, _, result = part.partition("=")
        steps.append(Step(rule=rule.strip(), result=result.strip()))
    return steps


class TableVyakarana(Vyakarana):
    """An engine that answers from a table of precomputed derivations."""

    def __init__(self, df: pd.DataFrame):
        self._krt: Dict[Tuple, List[Prakriya]] = {}
        self._tin: Dict[Tuple, List[Prakriya]] = {}
        self._tin_any_pada: Dict[Tuple, List[Prakriya]] = {}

        for ri, row in df.iterrows():
            try:
                kind = _clean_cell(row["type"])
                code = _clean_cell(row["dhatu"])
                text = _clean_cell(row["text"])
                if code is None or text is None:
                    continue
                sanadi = _enum(Sanadi, row["sanadi"])
                upasarga = _clean_cell(row["upasarga"])
                prakriya = Prakriya(text=text, history=parse_steps(row["steps"]))

                if kind == "krt":
                    key = (code, _enum(BaseKrt, row["krt"]), sanadi, upasarga)
                    self._krt.setdefault(key, []).append(prakriya)
                elif kind == "tin":
                    base = (
                        code,
                        _enum(Lakara, row["lakara"]),
                        _enum(Prayoga, row["prayoga"]),
                        _enum(Purusha, row["purusha"]),
                        _enum(Vacana, row["vacana"]),
                    )
                    pada = _enum(DhatuPada, row["pada"])
                    self._tin.setdefault(base + (pada, sanadi, upasarga), []).append(prakriya)
                    self._tin_any_pada.setdefault(base + (sanadi, upasarga), []).append(prakriya)
                else:
                    print(f"Warning: unknown form type '{kind}' in row {ri}, skipped.")
            except KeyError as e:
                print(f"Warning: unknown value {e} in row {ri}, skipped.")

    @classmethod
    def from_tsv(cls, path: Path = FORMS_PATH) -> "TableVyakarana":
        try:
            df = pd.read_csv(
                path,
                sep="\t",
                header=0,
                dtype=str,
                keep_default_na=False,
                quoting=csv.QUOTE_NONE,
            )
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise RuntimeError(f"Cannot read forms table '{path}': {e}")
        missing = [c for c in FORM_COLUMNS if c not in df.columns]
        if missing:
            raise RuntimeError(f"Forms table '{path}' is missing columns: {', '.join(missing)}")
        print(f"Loaded {len(df)} derivations from '{path}'.")
        return cls(df)

    def derive_krdantas(self, code, krt, sanadi, upasarga):
        return list(self._krt.get((code, krt, sanadi, upasarga or None), []))

    def derive_tinantas(self, code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga):
        upasarga = upasarga or None
        if pada is None:
            key = (code, lakara, prayoga, purusha, vacana, sanadi, upasarga)
            return list(self._tin_any_pada.get(key, []))
        key = (code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga)
        return list(self._tin.get(key, []))


FACTORY_ALIASES = {
    "vidyut": "prakriya_demo.engine.vidyut_engine:create",
}


def load_vyakarana(factory: str = VYAKARANA_FACTORY, *, forms_path: Path = FORMS_PATH) -> Vyakarana:
    """Build the engine once at startup.

    `factory` is a "module:callable" path or an alias from FACTORY_ALIASES;
    empty selects the table engine.
    """
    if not factory:
        return TableVyakarana.from_tsv(forms_path)
    factory = FACTORY_ALIASES.get(factory, factory)
    module_name, _, attr = factory.partition(":")
    try:
        module = importlib.import_module(module_name)
        create = getattr(module, attr or "create")
    except (ImportError, AttributeError) as e:
        raise RuntimeError(f"Cannot load vyakarana factory '{factory}': {e}")
    vyakarana = create()
    if not isinstance(vyakarana, Vyakarana):
        raise RuntimeError(f"Vyakarana factory '{factory}' returned {type(vyakarana).__name__}, not a Vyakarana")
    return vyakarana
