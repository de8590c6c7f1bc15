import sys
import types

import pandas as pd
import pytest

from prakriya_demo.engine.args import (
    BaseKrt, DhatuPada, GenerationOptions, Lakara, Prayoga, Purusha, Sanadi, Step, Vacana,
)
from prakriya_demo.engine.load_dhatus import load_dhatus
from prakriya_demo.engine.paradigm_builder import create_krdantas, create_paradigm, create_tinantas
from prakriya_demo.engine.settings import DHATUPATHA_PATH, FORMS_PATH
from prakriya_demo.engine.vyakarana import (
    FORM_COLUMNS, TableVyakarana, Vyakarana, load_vyakarana, parse_steps,
)

from helpers import StubLipi, StubVyakarana


def frame(rows):
    return pd.DataFrame([dict(zip(FORM_COLUMNS, r)) for r in rows], columns=FORM_COLUMNS)


@pytest.fixture(scope="module")
def bundled():
    return TableVyakarana.from_tsv(FORMS_PATH)


@pytest.fixture(scope="module")
def bhu():
    return load_dhatus(DHATUPATHA_PATH, lipi=StubLipi()).find("01.0001")


def test_parse_steps():
    assert parse_steps("1.3.1=BU; 3.1.68=BU+Sap ;6.1.78") == [
        Step("1.3.1", "BU"), Step("3.1.68", "BU+Sap"), Step("6.1.78", ""),
    ]
    assert parse_steps("") == []


def test_tinantas_lookup_with_and_without_pada():
    v = TableVyakarana(frame([
        ("tin", "01.0001", "Lat", "Kartari", "Prathama", "Eka", "Parasmai", "", "", "", "Bavati", ""),
        ("tin", "01.0001", "Lat", "Kartari", "Prathama", "Eka", "Atmane", "", "", "", "Bavate", ""),
    ]))
    args = ("01.0001", Lakara.Lat, Prayoga.Kartari, Purusha.Prathama, Vacana.Eka)
    assert [p.text for p in v.derive_tinantas(*args, DhatuPada.Atmane, None, None)] == ["Bavate"]
    assert [p.text for p in v.derive_tinantas(*args, None, None, None)] == ["Bavati", "Bavate"]
    assert v.derive_tinantas(*args, DhatuPada.Parasmai, Sanadi.san, None) == []


def test_rows_with_unknown_values_are_skipped(capsys):
    v = TableVyakarana(frame([
        ("tin", "01.0001", "Lxt", "Kartari", "Prathama", "Eka", "", "", "", "", "?", ""),
        ("sup", "01.0001", "", "", "", "", "", "", "", "", "?", ""),
        ("krt", "01.0001", "", "", "", "", "", "kta", "", "", "BUta", ""),
    ]))
    assert [p.text for p in v.derive_krdantas("01.0001", BaseKrt.kta, None, None)] == ["BUta"]
    out = capsys.readouterr().out
    assert "Warning: unknown value" in out
    assert "Warning: unknown form type 'sup'" in out


def test_from_tsv_requires_columns(tmp_path):
    path = tmp_path / "forms.tsv"
    path.write_text("type\tdhatu\ttext\ntin\t01.0001\tBavati\n", encoding="utf-8")
    with pytest.raises(RuntimeError, match="missing columns"):
        TableVyakarana.from_tsv(path)


def test_from_tsv_missing_file_is_fatal(tmp_path):
    with pytest.raises(RuntimeError, match="Cannot read forms table"):
        TableVyakarana.from_tsv(tmp_path / "missing.tsv")


def test_bundled_present_paradigm(bundled, bhu):
    paradigm = create_paradigm(bundled, bhu, Lakara.Lat, Prayoga.Kartari, DhatuPada.Parasmai, None, None)
    assert [cell[0].text for cell in paradigm] == [
        "Bavati", "BavataH", "Bavanti",
        "Bavasi", "BavaTaH", "BavaTa",
        "BavAmi", "BavAvaH", "BavAmaH",
    ]


def test_bundled_imperative_is_deduplicated(bundled, bhu):
    paradigm = create_paradigm(bundled, bhu, Lakara.Lot, Prayoga.Kartari, DhatuPada.Parasmai, None, None)
    assert [p.text for p in paradigm[0]] == ["Bavatu", "BavatAt"]
    assert [p.text for p in paradigm[3]] == ["Bava", "BavatAt"]


def test_bundled_partial_paradigm_is_dropped(bundled, bhu):
    assert create_paradigm(bundled, bhu, Lakara.Lat, Prayoga.Kartari, DhatuPada.Parasmai, None, "pra") == []
    rows = create_tinantas(bundled, bhu, GenerationOptions(sanadi=Sanadi.Ric))
    assert all(row.paradigms == {} for row in rows)


def test_bundled_tinantas_and_krdantas(bundled, bhu):
    rows = create_tinantas(bundled, bhu, GenerationOptions())
    retained = {row.lakara: list(row.paradigms) for row in rows if row.paradigms}
    assert retained == {
        Lakara.Lat: [DhatuPada.Parasmai],
        Lakara.Lot: [DhatuPada.Parasmai],
    }

    nominal, participles, avyayas = create_krdantas(bundled, bhu, GenerationOptions())
    kta = next(g for g in participles if g.title == "kta")
    assert [p.text for p in kta.padas] == ["BUta"]
    assert [g.padas[0].text for g in avyayas if g.padas] == ["Bavitum", "BUtvA"]


def test_load_vyakarana_defaults_to_table(tmp_path):
    path = tmp_path / "forms.tsv"
    path.write_text("\t".join(FORM_COLUMNS) + "\n", encoding="utf-8")
    assert isinstance(load_vyakarana("", forms_path=path), TableVyakarana)


def test_load_vyakarana_from_factory(monkeypatch):
    module = types.ModuleType("fake_vyakarana")
    built, default = StubVyakarana(), StubVyakarana()
    module.build = lambda: built
    module.create = lambda: default
    monkeypatch.setitem(sys.modules, "fake_vyakarana", module)

    assert load_vyakarana("fake_vyakarana:build") is built
    assert load_vyakarana("fake_vyakarana") is default


def test_load_vyakarana_rejects_non_engines(monkeypatch):
    module = types.ModuleType("fake_vyakarana")
    module.create = lambda: object()
    monkeypatch.setitem(sys.modules, "fake_vyakarana", module)
    with pytest.raises(RuntimeError, match="not a Vyakarana"):
        load_vyakarana("fake_vyakarana")


def test_engine_must_implement_both_derivations():
    class TinOnly(Vyakarana):
        def derive_tinantas(self, code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga):
            return []

    with pytest.raises(TypeError):
        TinOnly()


def test_load_vyakarana_bad_factory_is_fatal():
    with pytest.raises(RuntimeError, match="Cannot load vyakarana factory"):
        load_vyakarana("no_such_module_here:create")
