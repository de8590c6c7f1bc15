import pytest

from prakriya_demo.engine.load_dhatus import DhatuCatalog
from prakriya_demo.engine.state import Store

from helpers import BHU, EDH, GAM, StubLipi, StubVyakarana, cell_text


@pytest.fixture
def lipi():
    return StubLipi()


@pytest.fixture
def catalog(lipi):
    return DhatuCatalog([BHU, EDH, GAM], lipi)


@pytest.fixture
def vyakarana():
    return StubVyakarana(
        tin=cell_text,
        krt=lambda code, krt, sanadi, upasarga: [f"{code}-{krt.name}"],
    )


@pytest.fixture
def store(catalog, vyakarana):
    return Store(catalog, vyakarana, script="devanagari")
