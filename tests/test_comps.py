import pytest

from rental_engine.models.property import ComparableInput
from rental_engine.services.comps_service import CompsService


def _comps():
    return [
        ComparableInput(id=1, address="Av. Italia 900", size_m2=50, rent_clp=500_000),
        ComparableInput(id=2, address="Los Leones 50", size_m2=100, rent_clp=800_000, link="https://example.cl/2"),
        ComparableInput(id=3, address="Irarrazaval 3000", rent_clp=300_000),
    ]


def test_ranked_by_size_similarity():
    comps, average = CompsService().get_ranked_comps(50, _comps())
    assert [comp.id for comp in comps] == [1, 3, 2]
    assert [comp.similarity_score for comp in comps] == [100, 85, 50]
    assert average == pytest.approx(9_000)


def test_price_per_m2_guarded_for_missing_size():
    comps, _ = CompsService().get_ranked_comps(50, _comps())
    by_id = {comp.id: comp for comp in comps}
    assert by_id[1].price_per_m2 == pytest.approx(10_000)
    assert by_id[3].price_per_m2 == 0
    assert by_id[2].link == "https://example.cl/2"
    assert by_id[1].link is None


def test_unknown_subject_size_uses_default_similarity():
    comps, _ = CompsService().get_ranked_comps(0, _comps())
    assert {comp.similarity_score for comp in comps} == {85}
    assert [comp.id for comp in comps] == [1, 2, 3]


def test_no_comparables():
    assert CompsService().get_ranked_comps(50, []) == ([], 0.0)
