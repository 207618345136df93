import random

import pytest
from codebreaker.engine import (
    Aggregate, GameOver, InconsistentHistory, InvalidCode, InvalidFeedback, SessionExhausted, Status,
    all_codes, filter_candidates, new_session, opening_guesses, parse_code, propose, random_secret,
    evaluate, submit, undo,
)


def test_new_session_starts_with_universe():
    s = new_session()
    assert s.status is Status.NOT_STARTED
    assert s.moves == 0 and s.history == []
    assert len(s.candidates) == 10_000
    s.raise_for_status()


def test_propose_then_submit():
    s = propose(new_session(), "1234")
    assert s.status is Status.AWAITING_FEEDBACK
    assert s.pending == (1, 2, 3, 4)

    s2 = submit(s, "1234", "CPWW")
    assert s2.status is Status.AWAITING_NEXT_GUESS
    assert s2.pending is None
    assert s2.guesses == ((1, 2, 3, 4),)
    assert s2.feedbacks == ("CPWW",)


def test_submit_does_not_mutate_input():
    s = new_session()
    s2 = submit(s, "1234", "CPWW")
    assert s.moves == 0 and len(s.candidates) == 10_000
    assert s2.moves == 1 and len(s2.candidates) < 10_000


def test_candidates_shrink_monotonically():
    s = new_session()
    sizes = [len(s.candidates)]
    for guess, fb in [("1234", "CPWW"), ("1506", "CWWP"), ("1967", "CWCP")]:
        s = submit(s, guess, fb)
        sizes.append(len(s.candidates))
    assert sizes == sorted(sizes, reverse=True)
    assert s.candidates == ((1, 7, 6, 2),)


def test_submit_aggregate_feedback():
    s = submit(new_session(), "1234", Aggregate(1, 1))
    assert s.feedbacks == (Aggregate(1, 1),)
    assert (1, 7, 6, 2) in s.candidates
    per_slot = submit(new_session(), "1234", "CPWW")
    assert set(per_slot.candidates) <= set(s.candidates)


def test_win_is_terminal():
    s = submit(new_session(), "1467", "CCCC")
    assert s.status is Status.WON and s.is_won
    assert s.candidates == ((1, 4, 6, 7),)
    with pytest.raises(GameOver):
        submit(s, "1467", "CCCC")
    with pytest.raises(GameOver):
        propose(s, "1467")


def test_inconsistent_history_then_undo():
    s = submit(new_session(), "1234", "CCCW")
    bad = submit(s, "1234", "WWWW")
    assert bad.status is Status.EXHAUSTED
    assert bad.candidates == ()
    with pytest.raises(InconsistentHistory):
        bad.raise_for_status()
    with pytest.raises(GameOver):
        submit(bad, "5678", "WWWW")

    fixed = undo(bad)
    assert fixed.guesses == s.guesses
    assert fixed.candidates == s.candidates
    assert fixed.status is Status.AWAITING_NEXT_GUESS


def test_undo_on_fresh_session_is_noop():
    s = new_session()
    assert undo(s) is s


def test_invalid_input_leaves_session_unchanged():
    s = submit(new_session(), "1234", "CPWW")
    with pytest.raises(InvalidFeedback):
        submit(s, "5678", Aggregate(3, 2))
    with pytest.raises(InvalidCode):
        submit(s, "567", "WWWW")
    assert s.moves == 1


def test_move_ceiling():
    s = new_session()
    s = submit(s, "0000", "WWWW", max_moves=2)
    s = submit(s, "1111", "WWWW", max_moves=2)
    with pytest.raises(SessionExhausted):
        submit(s, "2222", "WWWW", max_moves=2)


def _play_unsolved(secret, moves):
    s = new_session()
    for d in range(moves):
        guess = parse_code(str(d) * 4)
        s = submit(s, guess, evaluate(guess, secret))
    return s


def test_ceiling_is_reported_as_status():
    secret = parse_code("9876")
    s = _play_unsolved(secret, 10)
    assert secret in s.candidates
    assert s.status is Status.OUT_OF_MOVES
    with pytest.raises(SessionExhausted):
        s.raise_for_status()
    with pytest.raises(SessionExhausted):
        propose(s, "9876")
    with pytest.raises(SessionExhausted):
        submit(s, "9876", "CCCC")


def test_ceiling_travels_with_the_session():
    s = new_session(max_moves=3)
    for g in ("0000", "1111", "2222"):
        s = submit(s, g, "WWWW")
    assert s.max_moves == 3
    assert s.status is Status.OUT_OF_MOVES

    back = undo(s)
    assert back.max_moves == 3
    assert back.status is Status.AWAITING_NEXT_GUESS
    back.raise_for_status()


def test_candidates_match_replayed_history():
    s = new_session()
    moves = [("0123", "PWWW"), ("4567", "WPWC")]
    for g, fb in moves:
        s = submit(s, g, fb)
    expected = all_codes()
    for g, fb in moves:
        expected = filter_candidates(expected, parse_code(g), fb)
    assert s.candidates == expected


def test_opening_guesses_and_random_secret():
    book = opening_guesses()
    assert (1, 2, 3, 4) in book
    assert all(len(set(c)) == 4 for c in book)

    a = random_secret(random.Random(7))
    b = random_secret(random.Random(7))
    assert a == b
    assert len(a) == 4 and all(0 <= d <= 9 for d in a)
