import pytest
from codebreaker.engine import parse_code
from codebreaker.solvers import Advisor
from codebreaker.solvers.simulate import expected_moves, simulate

FAMILY = tuple(parse_code(f"146{d}") for d in range(10))


def test_empty_candidates():
    assert simulate(parse_code("1234"), []) == {}


def test_candidate_guess_on_two_codes():
    pair = [parse_code("1467"), parse_code("1468")]
    assert simulate(pair[0], pair) == {1: 0.5, 2: 0.5}


def test_terminal_layer_estimate():
    # 7890 leaves four singletons and one bucket of six; depth 0 cannot expand the six
    dist = simulate(parse_code("7890"), FAMILY, moves_so_far=2, max_depth=0)
    assert dist == pytest.approx({4: 0.4, 6: 0.6})


def test_small_terminal_bucket_gets_two_extra_moves():
    cands = [parse_code(c) for c in ("1461", "1462", "1463", "1460")]
    dist = simulate(parse_code("9999"), cands, moves_so_far=0, max_depth=0)
    assert dist == pytest.approx({3: 1.0})


@pytest.mark.parametrize("depth", [0, 1, 2, 3])
@pytest.mark.parametrize("guess", ["7890", "1460", "0235", "5555"])
def test_mass_sums_to_one(guess, depth):
    dist = simulate(parse_code(guess), FAMILY, moves_so_far=1, max_depth=depth)
    assert sum(dist.values()) == pytest.approx(1.0)
    assert all(0.0 <= p <= 1.0 for p in dist.values())
    assert min(dist) >= 2
    assert list(dist) == sorted(dist)


def test_exact_layers_with_advisor_chooser():
    advisor = Advisor()
    dist = advisor.simulate(parse_code("0235"), FAMILY, moves_so_far=2)
    assert sum(dist.values()) == pytest.approx(1.0)
    # four singletons resolve on move 4 whatever happens deeper
    assert dist.get(4, 0.0) >= 0.4 - 1e-9
    assert 3 not in dist


def test_expected_moves():
    assert expected_moves({1: 0.5, 2: 0.5}) == pytest.approx(1.5)
    assert expected_moves({}) == 0
