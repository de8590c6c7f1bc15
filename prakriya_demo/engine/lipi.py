import re
from typing import Dict

from aksharamukha import transliterate

# Our scheme ids -> aksharamukha script names.
SCHEMES: Dict[str, str] = {
    "slp1": "SLP1",
    "hk": "HK",
    "itrans": "ITRANS",
    "iast": "IAST",
    "devanagari": "Devanagari",
    "bengali": "Bengali",
    "gujarati": "Gujarati",
    "kannada": "Kannada",
    "tamil": "Tamil",
    "telugu": "Telugu",
}

_svara_re = re.compile(r"[\^\\]")


def remove_svaras(s: str) -> str:
    """Drop the SLP1 svara marks ^ and \\."""
    return _svara_re.sub("", s)


class Lipi:
    """Script conversion backed by aksharamukha."""

    def transliterate(self, text: str, source: str, target: str) -> str:
        if not text or source == target:
            return text
        try:
            src = SCHEMES[source]
            tgt = SCHEMES[target]
        except KeyError as e:
            raise ValueError(f"Unknown script {e}") from None
        return transliterate.process(src, tgt, text, nativize=False)
