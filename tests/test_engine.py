import pytest
from codebreaker.engine import (
    Aggregate, InvalidCode, InvalidFeedback, aggregate, all_codes, evaluate, filter_candidates,
    get_rule, is_solved, parse_code, replay, validate_feedback,
)
from codebreaker.engine.feedback import duplicate_aware, membership

# Every 97th code: ~100 codes spread over the whole range
SAMPLE = all_codes()[::97]


# --- duplicate-aware golden tests ---
@pytest.mark.parametrize("guess,secret,expected", [
    ("7890", "1467", "PWWW"),
    ("1467", "1467", "CCCC"),
    ("1123", "1467", "CWWW"),
    ("1234", "4321", "PPPP"),
    ("0011", "1000", "PCPP"),
    ("5555", "5123", "CWWW"),
    ("2255", "2525", "CPPC"),
    ("9999", "0000", "WWWW"),
])
def test_duplicate_aware_golden(guess, secret, expected):
    assert evaluate(parse_code(guess), parse_code(secret), duplicate_aware) == expected


# --- membership rule: no duplicate accounting ---
@pytest.mark.parametrize("guess,secret,expected", [
    ("7890", "1467", "PWWW"),
    ("1123", "1467", "CPWW"),
    ("5555", "5123", "CPPP"),
    ("1234", "4321", "PPPP"),
])
def test_membership_golden(guess, secret, expected):
    assert evaluate(parse_code(guess), parse_code(secret), membership) == expected


def test_get_rule():
    assert get_rule("duplicate_aware") is duplicate_aware
    assert get_rule("membership") is membership
    with pytest.raises(ValueError):
        get_rule("mastermind_classic")


@pytest.mark.parametrize("rule", [duplicate_aware, membership])
def test_pattern_counts_are_bounded(rule):
    for g in SAMPLE:
        for s in SAMPLE:
            agg = aggregate(evaluate(g, s, rule))
            assert 0 <= agg.correct <= 4
            assert agg.correct + agg.partial <= 4


@pytest.mark.parametrize("rule", [duplicate_aware, membership])
def test_all_correct_iff_equal(rule):
    for g in SAMPLE:
        for s in SAMPLE:
            assert (evaluate(g, s, rule) == "CCCC") == (g == s)


def test_aggregate_and_is_solved():
    assert aggregate("CPWW") == Aggregate(1, 1)
    assert aggregate("WWWW") == Aggregate(0, 0)
    assert is_solved("CCCC") and is_solved(Aggregate(4, 0))
    assert not is_solved("CCCP") and not is_solved(Aggregate(3, 1))


def test_universe_is_complete_and_cached():
    u = all_codes()
    assert len(u) == 10_000
    assert u[0] == (0, 0, 0, 0) and u[-1] == (9, 9, 9, 9)
    assert len(set(u)) == 10_000
    assert all_codes() is u


def test_filter_scenario_1467():
    cands = [parse_code(f"146{d}") for d in range(10)]
    out = filter_candidates(cands, parse_code("7890"), "PWWW")
    assert out == ((1, 4, 6, 7),)


def test_filter_by_aggregate_is_weaker():
    cands = [parse_code(f"146{d}") for d in range(10)]
    out = filter_candidates(cands, parse_code("7890"), Aggregate(0, 1))
    assert out == ((1, 4, 6, 7), (1, 4, 6, 8), (1, 4, 6, 9))


def test_filter_guess_equals_secret_leaves_only_secret():
    secret = parse_code("3141")
    out = filter_candidates(all_codes(), secret, "CCCC")
    assert out == (secret,)


def test_filter_idempotent_and_monotonic():
    guess = parse_code("1234")
    for secret in SAMPLE[:10]:
        fb = evaluate(guess, secret)
        once = filter_candidates(all_codes(), guess, fb)
        twice = filter_candidates(once, guess, fb)
        assert once == twice
        assert len(once) <= len(all_codes())
        assert secret in once


def test_filter_preserves_order():
    out = filter_candidates(all_codes(), parse_code("1234"), "CWWW")
    assert list(out) == sorted(out)


def test_replay_matches_stepwise_filtering():
    history = [(parse_code("1234"), "CPWW"), (parse_code("1506"), "CWWP")]
    step = filter_candidates(all_codes(), *history[0])
    step = filter_candidates(step, *history[1])
    assert replay(history) == step


# --- validation ---
@pytest.mark.parametrize("value,expected", [
    ("0123", (0, 1, 2, 3)),
    (" 9876 ", (9, 8, 7, 6)),
    ([1, 4, 6, 7], (1, 4, 6, 7)),
    (("0", "0", "1", "2"), (0, 0, 1, 2)),
])
def test_parse_code_ok(value, expected):
    assert parse_code(value) == expected


@pytest.mark.parametrize("value", [
    "123", "12345", "12a4", "12²4", "١234",
    [1, 2, 3, 10], [1, 2, 3, -1], 1234, [True, 1, 2, 3],
])
def test_parse_code_rejects(value):
    with pytest.raises(InvalidCode):
        parse_code(value)


@pytest.mark.parametrize("value,expected", [
    ("cpww", "CPWW"),
    ("CCCC", "CCCC"),
    (["correct", "partial", "wrong", "wrong"], "CPWW"),
    (Aggregate(1, 2), Aggregate(1, 2)),
    (Aggregate(4, 0), Aggregate(4, 0)),
])
def test_validate_feedback_ok(value, expected):
    assert validate_feedback(value) == expected


@pytest.mark.parametrize("value", ["CPW", "CPWWW", "CPWX", Aggregate(3, 2), Aggregate(-1, 0), Aggregate(5, 0), 42])
def test_validate_feedback_rejects(value):
    with pytest.raises(InvalidFeedback):
        validate_feedback(value)


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_code("abcd")
    with pytest.raises(ValueError):
        validate_feedback("CPW")
