"""Two-way mapping between an `AppState` and flat query parameters.

Absent keys mean "unset". Enums are written as their decimal ordinal and
the active pada as JSON. Reading never fails: a value that cannot be parsed
or matched is skipped and the remaining fields are still restored.
"""
import json
from enum import IntEnum
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple

from .args import (
    TABS, TIN_TAB, BaseKrt, DhatuPada, KrtPada, Lakara, Pada, Prayoga, Purusha, Sanadi, TinPada,
    Vacana, pada_tab,
)
from .load_dhatus import DhatuCatalog


class Params:
    Dhatu = "dhatu"
    Tab = "tab"
    DhatuPada = "pada"
    Prayoga = "prayoga"
    Sanadi = "sanadi"
    ActivePada = "activePada"
    Upasarga = "upasarga"


ALL_PARAMS = [
    Params.Dhatu, Params.Tab, Params.DhatuPada, Params.Prayoga,
    Params.Sanadi, Params.ActivePada, Params.Upasarga,
]


def _opt_int(value: Optional[IntEnum]) -> Optional[int]:
    return None if value is None else int(value)


def _opt_enum(cls, value):
    if value is None:
        return None
    return _req_enum(cls, value)


def _req_enum(cls, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{cls.__name__} ordinal must be an int, got {value!r}")
    return cls(value)


def encode_pada(pada: Pada) -> str:
    d: Dict[str, Any] = {
        "text": pada.text,
        "dhatu": {
            "code": pada.dhatu.code,
            "upadesha": pada.dhatu.upadesha,
            "artha": pada.dhatu.artha,
        },
        "sanadi": _opt_int(pada.sanadi),
        "upasarga": pada.upasarga,
    }
    if isinstance(pada, TinPada):
        d.update({
            "type": "tin",
            "lakara": int(pada.lakara),
            "prayoga": int(pada.prayoga),
            "purusha": int(pada.purusha),
            "vacana": int(pada.vacana),
            "pada": _opt_int(pada.pada),
        })
    elif isinstance(pada, KrtPada):
        d.update({"type": "krt", "krt": int(pada.krt)})
    else:
        raise TypeError(f"Not a pada: {pada!r}")
    return json.dumps(d, ensure_ascii=False, separators=(",", ":"))


def decode_pada(s: Optional[str], catalog: DhatuCatalog) -> Optional[Pada]:
    """Parse an encoded pada. Its dhatu is re-read from `catalog`."""
    if not s:
        return None
    try:
        d = json.loads(s)
        ref = d["dhatu"]
        dhatu = catalog.find(ref["code"] if isinstance(ref, dict) else ref)
        text = d["text"]
        if dhatu is None or not isinstance(text, str) or not text:
            return None
        upasarga = d.get("upasarga") or None
        if upasarga is not None and not isinstance(upasarga, str):
            return None
        sanadi = _opt_enum(Sanadi, d.get("sanadi"))

        kind = d["type"]
        if kind == "tin":
            return TinPada(
                text=text,
                dhatu=dhatu,
                lakara=_req_enum(Lakara, d["lakara"]),
                prayoga=_req_enum(Prayoga, d["prayoga"]),
                purusha=_req_enum(Purusha, d["purusha"]),
                vacana=_req_enum(Vacana, d["vacana"]),
                pada=_opt_enum(DhatuPada, d.get("pada")),
                sanadi=sanadi,
                upasarga=upasarga,
            )
        if kind == "krt":
            return KrtPada(
                text=text,
                dhatu=dhatu,
                krt=_req_enum(BaseKrt, d["krt"]),
                sanadi=sanadi,
                upasarga=upasarga,
            )
    except (ValueError, KeyError, TypeError, RecursionError):
        pass
    return None


def _parse_ordinal(cls, value: Optional[str]):
    if not value:
        return None
    try:
        return cls(int(value))
    except ValueError:
        return None


def _put(params: Dict[str, str], key: str, value) -> None:
    if value is None or value == "":
        return
    if isinstance(value, IntEnum):
        value = str(int(value))
    params[key] = value


def serialize(state) -> Dict[str, str]:
    params: Dict[str, str] = {}
    opts = state.options
    _put(params, Params.Dhatu, state.active_dhatu.code if state.active_dhatu else None)
    _put(params, Params.Tab, state.active_tab)
    _put(params, Params.Prayoga, opts.prayoga)
    _put(params, Params.DhatuPada, opts.dhatu_pada)
    _put(params, Params.Sanadi, opts.sanadi)
    _put(params, Params.Upasarga, opts.upasarga)
    if state.active_pada is not None:
        _put(params, Params.ActivePada, encode_pada(state.active_pada))
    return params


def update_params(params: MutableMapping[str, str], state) -> None:
    """Write `state` into `params` in place, dropping keys that became unset."""
    new = serialize(state)
    for key in ALL_PARAMS:
        if key in new:
            if params.get(key) != new[key]:
                params[key] = new[key]
        elif key in params:
            del params[key]


def deserialize(params: Mapping[str, str], catalog: DhatuCatalog) -> List[Tuple[str, Any]]:
    """Parsed fields as (name, value) pairs in restoration order.

    The order is tab, options, dhatu, active pada, whatever the order of
    `params`: the tab must come before the pada it would otherwise clear, and
    the dhatu before the pada that needs it. The pada must also belong to the
    restored tab, and a missing tab counts as the tin tab.
    """
    fields: List[Tuple[str, Any]] = []

    tab = params.get(Params.Tab)
    if tab in TABS:
        fields.append(("tab", tab))
    else:
        tab = TIN_TAB

    prayoga = _parse_ordinal(Prayoga, params.get(Params.Prayoga))
    if prayoga is not None:
        fields.append(("prayoga", prayoga))
    dhatu_pada = _parse_ordinal(DhatuPada, params.get(Params.DhatuPada))
    if dhatu_pada is not None:
        fields.append(("dhatu_pada", dhatu_pada))
    upasarga = params.get(Params.Upasarga)
    if upasarga:
        fields.append(("upasarga", upasarga))
    sanadi = _parse_ordinal(Sanadi, params.get(Params.Sanadi))
    if sanadi is not None:
        fields.append(("sanadi", sanadi))

    dhatu = catalog.find(params.get(Params.Dhatu) or None)
    if dhatu is not None:
        fields.append(("dhatu", dhatu))
        pada = decode_pada(params.get(Params.ActivePada), catalog)
        if pada is not None and pada.dhatu == dhatu and pada_tab(pada) == tab:
            fields.append(("active_pada", pada))
    return fields
