import csv
import io
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .args import Dhatu
from .lipi import Lipi, remove_svaras
from .settings import DHATUPATHA_PATH

# Schemes a user may type a filter query in.
QUERY_SCHEMES = ("devanagari", "hk")


def _clean_cell(val) -> str:
    if pd.isna(val):
        return ""
    return str(val).strip()


def leading_fields(text: str, n: int) -> str:
    """Cut every line down to its first `n` tab-separated fields."""
    return "\n".join("\t".join(line.split("\t")[:n]) for line in text.splitlines())


def parse_dhatus(text: str) -> List[Dhatu]:
    """Parse dhatupatha TSV text (code, upadesha, artha) into dhatus.

    Blank lines and header lines are skipped, and so are fields past the third.
    """
    if not text.strip():
        return []
    df = pd.read_csv(
        io.StringIO(leading_fields(text, 3)),
        sep="\t",
        header=None,
        names=["code", "upadesha", "artha"],
        dtype=str,
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
        skip_blank_lines=True,
    )
    dhatus: List[Dhatu] = []
    for row in df.itertuples(index=False):
        code = _clean_cell(row.code)
        if code == "" or code == "code":
            continue
        upadesha = _clean_cell(row.upadesha)
        dhatus.append(Dhatu(
            code=code,
            upadesha=upadesha,
            query=remove_svaras(upadesha),
            artha=_clean_cell(row.artha),
        ))
    return dhatus


class DhatuCatalog:
    """The loaded dhatupatha. Read-only after construction."""

    def __init__(self, dhatus: List[Dhatu], lipi: Lipi):
        self.dhatus = list(dhatus)
        self.lipi = lipi
        self._by_code: Dict[str, Dhatu] = {}
        for d in self.dhatus:
            self._by_code.setdefault(d.code, d)

    def __len__(self):
        return len(self.dhatus)

    def __iter__(self):
        return iter(self.dhatus)

    def find(self, code: Optional[str]) -> Optional[Dhatu]:
        if code is None:
            return None
        return self._by_code.get(code)

    def filter(self, query: Optional[str]) -> List[Dhatu]:
        if query is None:
            return list(self.dhatus)
        needles = {self.lipi.transliterate(query, scheme, "slp1") for scheme in QUERY_SCHEMES}
        return [
            d for d in self.dhatus
            if any(n in d.code or n in d.query or n in d.artha for n in needles)
        ]


def load_dhatus(path: Path = DHATUPATHA_PATH, *, lipi: Optional[Lipi] = None) -> DhatuCatalog:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise RuntimeError(f"Cannot read dhatupatha '{path}': {e}")
    try:
        dhatus = parse_dhatus(text)
    except pd.errors.ParserError as e:
        raise RuntimeError(f"Cannot parse dhatupatha '{path}': {e}")
    print(f"Loaded {len(dhatus)} dhatus from '{path}'.")
    return DhatuCatalog(dhatus, lipi if lipi is not None else Lipi())
