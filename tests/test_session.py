from collections import Counter

from config import Config
from core.session import GameSession, NoticeKind
from core.state import ActionType, Fx, Phase
from core.timers import TimerSlot


def record(session):
    seen = []
    session.subscribe(lambda state, action: seen.append(action.type))
    return seen


def test_start_schedules_first_entry_animation(make_session, fake_loop):
    session = make_session()
    assert session.state.animating is True
    assert session.timers.pending() == [TimerSlot.ANIMATION]

    fake_loop.advance(Config.ENTRY_ANIMATION_SEC)
    assert session.state.animating is False


def test_start_emits_the_opening_snapshot(make_engine, fake_loop):
    session = GameSession(make_engine(["CODE"]), session_id="test", loop=fake_loop)
    snapshots = []
    session.subscribe(lambda state, action: snapshots.append((state, action)))

    session.start()
    assert snapshots == [(session.state, None)]
    assert snapshots[0][0].attempts == 0
    assert snapshots[0][0].animating is True
    session.close()


def test_correct_guess_then_celebrate_advances_once(make_session, fake_loop):
    session = make_session(["CODE"])
    seen = record(session)

    assert session.submit_guess("code") is True
    assert session.state.phase is Phase.CORRECT
    assert session.state.fx is Fx.POP
    assert session.state.score == 40
    assert session.state.attempts == 1

    fake_loop.advance(Config.CELEBRATE_SEC)
    assert seen.count(ActionType.NEW_WORD) == 1
    assert session.state.phase is Phase.PLAYING
    assert session.state.fx is Fx.NONE
    assert session.state.attempts == 2
    assert session.state.score == 40

    fake_loop.advance(10)
    assert seen.count(ActionType.NEW_WORD) == 1
    assert session.state.animating is False


def test_wrong_guess_then_retry_returns_to_playing(make_session, fake_loop):
    session = make_session(["CODE"])
    session.edit_input("WRONG")

    assert session.submit_guess() is True
    assert session.state.phase is Phase.WRONG
    assert session.state.fx is Fx.SHAKE
    assert session.state.score == 0
    assert session.state.attempts == 1

    fake_loop.advance(Config.RETRY_SEC)
    assert session.state.phase is Phase.PLAYING
    assert session.state.user_input == ""
    assert session.state.fx is Fx.NONE
    assert session.state.current_word == "CODE"


def test_blank_submit_dispatches_nothing(make_session):
    session = make_session()
    seen = record(session)
    before = session.state

    assert session.submit_guess("") is False
    assert session.submit_guess("   ") is False
    assert seen == []
    assert session.state is before


def test_submit_and_edit_are_ignored_while_judged(make_session):
    session = make_session(["CODE"])
    session.submit_guess("nope")
    judged = session.state

    assert session.submit_guess("code") is False
    session.edit_input("typing")
    assert session.state.user_input == judged.user_input
    assert session.state.attempts == judged.attempts


def test_notices_for_judged_guesses(make_session, fake_loop):
    session = make_session(["CODE"])
    notices = []
    session.on_notice(notices.append)

    session.submit_guess("nope")
    fake_loop.advance(Config.RETRY_SEC)
    session.submit_guess("CODE")

    assert [n.kind for n in notices] == [NoticeKind.FAILURE, NoticeKind.SUCCESS]
    assert notices[1].points == 40
    assert notices[1].description == "+40 points"


def test_new_word_during_wrong_phase_drops_the_stale_reset(make_session, fake_loop):
    session = make_session(["CODE", "GAME"])
    session.submit_guess("nope")
    session.request_new_word()
    session.edit_input("GA")

    fake_loop.advance(Config.RETRY_SEC + 1)
    assert session.state.phase is Phase.PLAYING
    assert session.state.user_input == "GA"


def test_listener_actions_are_queued_in_order(make_session):
    session = make_session(["CODE"])
    seen = record(session)

    def chain(state, action):
        if action.type is ActionType.CHECK_START:
            session.edit_input("after")

    session.subscribe(chain)
    session.submit_guess("WRONG")

    # SET_INPUT queued during CHECK_START lands after CHECK_FAIL, so it is a no-op
    assert seen == [ActionType.CHECK_START, ActionType.CHECK_FAIL, ActionType.SET_INPUT]
    assert session.state.user_input == ""


def test_failing_listener_does_not_stop_the_queue(make_session):
    session = make_session(["CODE"])

    def broken(state, action):
        raise RuntimeError("render failed")

    session.subscribe(broken)
    session.submit_guess("code")
    assert session.state.phase is Phase.CORRECT
    assert session.state.score == 40


def test_close_cancels_timers_and_ignores_later_actions(make_session, fake_loop):
    session = make_session(["CODE"])
    session.submit_guess("code")
    assert session.timers.pending()

    session.close()
    final = session.state
    assert session.timers.pending() == []
    assert fake_loop.pending() == []

    fake_loop.advance(10)
    session.request_new_word()
    assert session.state is final


def test_scrambled_word_stays_a_permutation_across_rounds(make_session, fake_loop):
    session = make_session(["CODE", "GAME", "BUILD"])
    expected_score = 0
    for _ in range(20):
        state = session.state
        assert Counter(state.scrambled_word) == Counter(state.current_word)
        assert state.scrambled_word != state.current_word
        session.submit_guess(state.current_word)
        expected_score += len(state.current_word) * Config.SCORE_PER_LETTER
        fake_loop.advance(Config.CELEBRATE_SEC)
    assert session.state.score == expected_score
    assert session.state.attempts == 40
