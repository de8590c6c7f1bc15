"""Derivation engine backed by the `vidyut` package.

Select it with PRAKRIYA_VYAKARANA=vidyut. Dhatus are looked up by their
dhatupatha code in the entries shipped with vidyut's data files, so the
dhatupatha in DATA_DIR should be the one from the same data release.
"""
import importlib
from pathlib import Path
from typing import Dict, List

from .args import DhatuPada, Prakriya, Step
from .settings import VIDYUT_DATA_DIR
from .vyakarana import Vyakarana

DHATU_PADA_NAMES = {
    DhatuPada.Parasmai: "Parasmaipada",
    DhatuPada.Atmane: "Atmanepada",
}


def _step_result(result) -> str:
    # vidyut reports a step's result as a list of terms.
    if isinstance(result, str):
        return result
    return "".join(result)


def _to_prakriya(p) -> Prakriya:
    return Prakriya(
        text=p.text,
        history=[Step(rule=s.code, result=_step_result(s.result)) for s in p.history],
    )


class VidyutVyakarana(Vyakarana):

    def __init__(self, prakriya_module, dhatus: Dict[str, object]):
        self.vp = prakriya_module
        self.engine = prakriya_module.Vyakarana()
        self.dhatus = dhatus

    @classmethod
    def from_data(cls, data_dir: Path = VIDYUT_DATA_DIR) -> "VidyutVyakarana":
        try:
            vp = importlib.import_module("vidyut.prakriya")
        except ImportError as e:
            raise RuntimeError(f"The vidyut engine needs the 'vidyut' package: {e}")
        try:
            entries = vp.Data(str(data_dir)).load_dhatu_entries()
        except (OSError, ValueError) as e:
            raise RuntimeError(f"Cannot read vidyut data '{data_dir}': {e}")
        dhatus = {e.code: e.dhatu for e in entries}
        print(f"Loaded {len(dhatus)} vidyut dhatus from '{data_dir}'.")
        return cls(vp, dhatus)

    def _dhatu(self, code, sanadi, upasarga):
        dhatu = self.dhatus.get(code)
        if dhatu is None:
            return None
        if sanadi is not None:
            dhatu = dhatu.with_sanadi([getattr(self.vp.Sanadi, sanadi.name)])
        if upasarga:
            dhatu = dhatu.with_prefixes([upasarga])
        return dhatu

    def _derive(self, target) -> List[Prakriya]:
        return [_to_prakriya(p) for p in self.engine.derive(target)]

    def derive_krdantas(self, code, krt, sanadi, upasarga):
        dhatu = self._dhatu(code, sanadi, upasarga)
        if dhatu is None:
            return []
        krdanta = self.vp.Pratipadika.krdanta(dhatu, getattr(self.vp.Krt, krt.name))
        return self._derive(krdanta)

    def derive_tinantas(self, code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga):
        dhatu = self._dhatu(code, sanadi, upasarga)
        if dhatu is None:
            return []
        args = dict(
            dhatu=dhatu,
            prayoga=getattr(self.vp.Prayoga, prayoga.name),
            lakara=getattr(self.vp.Lakara, lakara.name),
            purusha=getattr(self.vp.Purusha, purusha.name),
            vacana=getattr(self.vp.Vacana, vacana.name),
        )
        if pada is not None:
            args["dhatu_pada"] = getattr(self.vp.DhatuPada, DHATU_PADA_NAMES[pada])
        return self._derive(self.vp.Pada.Tinanta(**args))


def create() -> VidyutVyakarana:
    return VidyutVyakarana.from_data()
