"""
Tests for betting rules and the per-street betting engine.
"""

import logging

import pytest
from pokerarena.core.actions import (
    ActionRecord, ActionType, AllIn, Bet, BigBlind, Call, Check, Fold,
    PossibleAction, Raise, SmallBlind, describe_action, describe_possible_action,
)
from pokerarena.core.betting import BettingRound
from pokerarena.core.rules import (
    BettingState, Street, first_to_act, get_possible_actions, is_valid_action,
)
from pokerarena.core.state import RoundState

from conftest import make_players, run, scripted


def types(actions):
    return [a.type for a in actions]


class TestPossibleActions:
    """Tests for the actions offered at decision time."""

    def test_facing_big_blind(self, round_state):
        charlie = round_state.players[2]
        actions = get_possible_actions(charlie, round_state)

        assert types(actions) == [
            ActionType.FOLD, ActionType.CALL, ActionType.RAISE, ActionType.ALL_IN,
        ]
        assert actions[2].minimal_amount == 10

    def test_big_blind_option(self, round_state):
        bob = round_state.players[1]
        actions = get_possible_actions(bob, round_state)

        assert types(actions) == [
            ActionType.FOLD, ActionType.CHECK, ActionType.RAISE, ActionType.ALL_IN,
        ]

    def test_unopened_street_offers_bet(self, four_players):
        state = RoundState(players=four_players, small_blind=5, big_blind=10)
        state.last_raise_by = 10
        actions = get_possible_actions(four_players[0], state)

        assert types(actions) == [
            ActionType.FOLD, ActionType.CHECK, ActionType.BET, ActionType.ALL_IN,
        ]
        assert actions[2].minimal_amount == 10

    def test_min_raise_capped_by_stack(self, round_state):
        short = round_state.players[2]
        short.chips = 15
        raise_action = get_possible_actions(short, round_state)[2]
        assert raise_action == PossibleAction(ActionType.RAISE, 5)

    def test_no_raise_when_call_takes_everything(self, round_state):
        short = round_state.players[2]
        short.chips = 10
        assert ActionType.RAISE not in types(get_possible_actions(short, round_state))

    def test_describe_possible_action(self):
        assert describe_possible_action(PossibleAction(ActionType.RAISE, 20)) == "raise 20 or more"
        assert describe_possible_action(PossibleAction(ActionType.BET, 10)) == "bet 10 or more"
        assert describe_possible_action(PossibleAction(ActionType.FOLD)) == "fold"
        assert describe_possible_action(PossibleAction(ActionType.ALL_IN)) == "all-in"


class TestActionValidation:
    """Tests for is_valid_action."""

    def test_raise_below_minimum_invalid(self, round_state):
        charlie = round_state.players[2]
        assert not is_valid_action(charlie, round_state, Raise(5))
        assert is_valid_action(charlie, round_state, Raise(10))

    def test_raise_above_stack_valid(self, round_state):
        charlie = round_state.players[2]
        assert is_valid_action(charlie, round_state, Raise(5000))

    def test_bet_invalid_once_bet_exists(self, round_state):
        assert not is_valid_action(round_state.players[2], round_state, Bet(50))

    def test_check_invalid_when_facing_bet(self, round_state):
        assert not is_valid_action(round_state.players[2], round_state, Check())

    def test_fold_and_all_in_always_valid(self, round_state):
        charlie = round_state.players[2]
        assert is_valid_action(charlie, round_state, Fold())
        assert is_valid_action(charlie, round_state, AllIn())

    def test_blinds_are_not_decisions(self, round_state):
        charlie = round_state.players[2]
        assert not is_valid_action(charlie, round_state, SmallBlind(5))
        assert not is_valid_action(charlie, round_state, BigBlind(10))


class TestFirstToAct:

    @pytest.mark.parametrize("street, seats, expected", [
        (Street.PREFLOP, 4, 2),
        (Street.PREFLOP, 3, 2),
        (Street.PREFLOP, 2, 0),
        (Street.FLOP, 4, 0),
        (Street.RIVER, 2, 0),
    ])
    def test_first_to_act(self, street, seats, expected):
        assert first_to_act(street, seats) == expected


class TestBettingRound:
    """Tests for running a street to completion."""

    def test_everyone_calls_then_big_blind_checks(self, round_state):
        betting = BettingRound(round_state, Street.PREFLOP)
        run(betting.run())

        assert betting.status == BettingState.CLOSED
        assert round_state.pot == 40
        assert round_state.current_bet == 0
        assert all(p.current_bet == 0 and p.total_bet == 10 for p in round_state.players)
        assert [r.action for r in round_state.actions] == [Call(), Call(), Call(), Check()]
        assert [r.player_name for r in round_state.actions] == [
            "Charlie", "Diana", "Alice", "Bob",
        ]

    def test_raise_reopens_action(self, round_state):
        agents = scripted([Call()], [Call()], [Raise(20)], [Call()])
        for player, agent in zip(round_state.players, agents):
            player.agent = agent

        run(BettingRound(round_state, Street.PREFLOP).run())

        assert round_state.pot == 120
        assert round_state.last_raise_by == 20
        assert all(p.total_bet == 30 for p in round_state.players)
        assert round_state.log[-1] == "Player Bob calls."

    def test_invalid_action_becomes_fold(self, round_state, caplog):
        agents = scripted([Call()], [Check()], [Check()], [Call()])
        for player, agent in zip(round_state.players, agents):
            player.agent = agent

        with caplog.at_level(logging.WARNING, logger="pokerarena.core.betting"):
            run(BettingRound(round_state, Street.PREFLOP).run())

        charlie = round_state.players[2]
        assert not charlie.is_active
        assert round_state.actions[0].action == Fold()
        assert "forcing fold" in caplog.text

    def test_all_in_above_current_bet_reopens_action(self):
        players = make_players(
            [1000, 1000, 50],
            scripted([Bet(40), Call()], [Call(), Call()], [AllIn()]),
        )
        alice, bob, charlie = players
        state = RoundState(players=players, small_blind=5, big_blind=10, last_raise_by=10)

        run(BettingRound(state, Street.FLOP).run())

        assert state.pot == 150
        assert charlie.is_all_in
        assert alice.chips == 950 and bob.chips == 950
        assert state.last_raise_by == 40
        # Alice was asked again, facing 10 more with a minimum raise of 40
        assert PossibleAction(ActionType.RAISE, 40) in alice.agent.seen[1]
        assert len(state.actions) == 5

    def test_lone_player_must_answer_all_in(self):
        players = make_players(
            [1000, 2000, 1000],
            scripted([Fold()], [Check(), Call()], [AllIn()]),
        )
        alice, bob, charlie = players
        state = RoundState(players=players, small_blind=5, big_blind=10)
        state.last_raise_by = 10

        run(BettingRound(state, Street.FLOP).run())

        assert not alice.is_active
        assert bob.chips == 1000
        assert not bob.is_all_in
        assert state.pot == 2000
        assert len(bob.agent.seen) == 2

    def test_bet_larger_than_stack_is_all_in(self):
        players = make_players([1000, 30], scripted([Check(), Call()], [Bet(500)]))
        alice, bob = players
        state = RoundState(players=players, small_blind=5, big_blind=10, last_raise_by=10)

        run(BettingRound(state, Street.TURN).run())

        assert bob.is_all_in and bob.chips == 0
        assert alice.chips == 970
        assert "Player Bob bets 500 (all in)." in state.log
        assert state.pot == 60

    def test_street_closes_immediately_with_one_active_player(self, four_players):
        for p in four_players[1:]:
            p.fold()
        state = RoundState(players=four_players, small_blind=5, big_blind=10)
        betting = BettingRound(state, Street.RIVER)

        run(betting.run())

        assert betting.seat_visits == 0
        assert state.actions == []

    def test_checked_street_visits_each_seat_once(self, four_players):
        state = RoundState(players=four_players, small_blind=5, big_blind=10)
        betting = BettingRound(state, Street.FLOP)

        run(betting.run())

        assert betting.seat_visits == len(four_players)
        assert [r.action for r in state.actions] == [Check()] * 4

    def test_called_street_ends_within_one_orbit(self, round_state):
        betting = BettingRound(round_state, Street.PREFLOP)

        run(betting.run())

        assert betting.seat_visits <= len(round_state.players)
        assert all(p.current_bet == 10 for p in round_state.players)
        assert round_state.pot == 40

    def test_cannot_run_twice(self, round_state):
        betting = BettingRound(round_state, Street.PREFLOP)
        run(betting.run())
        with pytest.raises(RuntimeError):
            run(betting.run())

    def test_player_without_agent(self, round_state):
        round_state.players[2].agent = None
        with pytest.raises(RuntimeError):
            run(BettingRound(round_state, Street.PREFLOP).run())


class TestDescribeAction:

    @pytest.mark.parametrize("action, all_in, expected", [
        (SmallBlind(5), False, "Player Bob posts small blind of 5."),
        (Fold(), False, "Player Bob folds."),
        (Check(), False, "Player Bob checks."),
        (Call(), True, "Player Bob calls (all in)."),
        (Bet(50), False, "Player Bob bets 50."),
        (Raise(20), False, "Player Bob raises by 20."),
        (AllIn(), True, "Player Bob goes all in."),
    ])
    def test_log_lines(self, action, all_in, expected):
        record = ActionRecord(
            player_id="p1", player_name="Bob", street="flop",
            action=action, is_all_in=all_in,
        )
        assert describe_action(record) == expected
