import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.environ.get("PRAKRIYA_DATA_DIR", BASE_DIR / "data"))

DHATUPATHA_PATH = DATA_DIR / "dhatupatha.tsv"
SUTRAPATHA_PATH = DATA_DIR / "sutrapatha.tsv"
FORMS_PATH = DATA_DIR / "forms.tsv"

# "module:callable" returning a Vyakarana, or "vidyut". Empty means the table
# engine over FORMS_PATH.
VYAKARANA_FACTORY = os.environ.get("PRAKRIYA_VYAKARANA", "")

DEFAULT_SCRIPT = os.environ.get("PRAKRIYA_SCRIPT", "devanagari")

# Data directory of the `vidyut` package, used when PRAKRIYA_VYAKARANA=vidyut.
VIDYUT_DATA_DIR = Path(os.environ.get("PRAKRIYA_VIDYUT_DATA", DATA_DIR / "vidyut" / "prakriya"))
