from prakriya_demo.engine.args import Dhatu, Prakriya, Step
from prakriya_demo.engine.vyakarana import Vyakarana


class StubLipi:
    """Transliterates only the pairs it is given; everything else is unchanged."""

    def __init__(self, table=None):
        self.table = table or {}

    def transliterate(self, text, source, target):
        return self.table.get((text, source, target), text)


class StubVyakarana(Vyakarana):
    """Engine driven by plain functions returning lists of texts."""

    def __init__(self, tin=None, krt=None):
        self.tin = tin or (lambda *args: [])
        self.krt = krt or (lambda *args: [])
        self.calls = []

    def derive_tinantas(self, code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga):
        self.calls.append(("tin", code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga))
        texts = self.tin(code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga)
        return [Prakriya(text=t, history=[Step("3.4.78", t)]) for t in texts]

    def derive_krdantas(self, code, krt, sanadi, upasarga):
        self.calls.append(("krt", code, krt, sanadi, upasarga))
        return [Prakriya(text=t, history=[Step("3.1.91", t)]) for t in self.krt(code, krt, sanadi, upasarga)]


BHU = Dhatu(code="01.0001", upadesha="BU", query="BU", artha="sattAyAm")
GAM = Dhatu(code="01.1137", upadesha="ga\\mx~", query="gamx~", artha="gatO")
EDH = Dhatu(code="01.0002", upadesha="eDa~\\", query="eDa~", artha="vfdDO")


def cell_text(code, lakara, prayoga, purusha, vacana, pada, sanadi, upasarga):
    return [f"{code}-{lakara.name}-{purusha.name}-{vacana.name}"]
