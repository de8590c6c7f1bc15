import csv
import io
from pathlib import Path
from typing import Dict

import pandas as pd

from .load_dhatus import leading_fields
from .settings import SUTRAPATHA_PATH


def load_sutras(path: Path = SUTRAPATHA_PATH) -> Dict[str, str]:
    """Read sutrapatha TSV (id, text) into a point-lookup map."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise RuntimeError(f"Cannot read sutrapatha '{path}': {e}")
    if not text.strip():
        return {}
    try:
        df = pd.read_csv(
            io.StringIO(leading_fields(text, 2)),
            sep="\t",
            header=None,
            names=["id", "text"],
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            skip_blank_lines=True,
        )
    except pd.errors.ParserError as e:
        raise RuntimeError(f"Cannot parse sutrapatha '{path}': {e}")

    sutras: Dict[str, str] = {}
    for row in df.itertuples(index=False):
        rid = str(row.id).strip()
        if rid == "":
            continue
        sutras[rid] = "" if pd.isna(row.text) else str(row.text).strip()
    print(f"Loaded {len(sutras)} sutras from '{path}'.")
    return sutras
