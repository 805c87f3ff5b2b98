"""Tests for the seat variants."""

import queue
import random
import threading

import pytest

from pokerround.core.parser import ParseResult
from pokerround.holdem.actions import Move, PlayerAction
from pokerround.holdem.errors import ConfigError, PlayerContractError
from pokerround.holdem.players import (
    CallingPlayer,
    ChannelPlayer,
    DecisionRequest,
    RandomPlayer,
    ScriptedPlayer,
)
from pokerround.holdem.state import RoundState

FACING_BET = [
    PlayerAction(Move.FOLD),
    PlayerAction(Move.CALL, 4),
    PlayerAction(Move.RAISE, 8),
    PlayerAction(Move.ALL_IN, 10),
]
FREE = [PlayerAction(Move.CHECK), PlayerAction(Move.BET, 4), PlayerAction(Move.ALL_IN, 10)]
SHORT = [PlayerAction(Move.FOLD), PlayerAction(Move.ALL_IN, 3)]


@pytest.fixture
def view():
    return RoundState([10, 10, 10], 2).view(0)


class TestPlayerLifecycle:
    def test_init_and_bust(self):
        player = CallingPlayer()
        player.init(3, 500)
        assert player.seat == 3
        assert player.initial_stack == 500
        assert not player.busted
        player.bust()
        assert player.busted


class TestScriptedPlayer:
    def test_replays_in_order(self, view):
        player = ScriptedPlayer([PlayerAction(Move.CALL), PlayerAction(Move.CHECK)])
        assert player.act(view, FACING_BET).move is Move.CALL
        assert player.act(view, FREE).move is Move.CHECK
        assert player.remaining == 0

    def test_accepts_dicts(self, view):
        player = ScriptedPlayer([{"action": "raise", "amount": 9}])
        assert player.act(view, FACING_BET) == PlayerAction(Move.RAISE, 9)

    def test_invalid_dict(self):
        with pytest.raises(ConfigError):
            ScriptedPlayer([{"action": "shove"}])

    def test_raise_without_amount_rejected(self):
        with pytest.raises(ConfigError):
            ScriptedPlayer([{"action": "raise"}])

    def test_unoffered_kind(self, view):
        player = ScriptedPlayer([PlayerAction(Move.CHECK)])
        with pytest.raises(PlayerContractError):
            player.act(view, FACING_BET)

    def test_script_exhausted(self, view):
        with pytest.raises(PlayerContractError, match="exhausted"):
            ScriptedPlayer().act(view, FREE)

    def test_records_last_offer(self, view):
        player = ScriptedPlayer([PlayerAction(Move.FOLD)])
        player.act(view, FACING_BET)
        assert player.last_possible_actions == FACING_BET

    def test_forced_blind_does_not_use_script(self, view):
        player = ScriptedPlayer([PlayerAction(Move.FOLD)])
        blind = [PlayerAction(Move.BLIND, 2)]
        assert player.act(view, blind) == blind[0]
        assert player.remaining == 1

    def test_push(self, view):
        player = ScriptedPlayer()
        player.push(PlayerAction(Move.CHECK))
        assert player.act(view, FREE).move is Move.CHECK


class TestCallingPlayer:
    def test_checks_when_free(self, view):
        assert CallingPlayer().act(view, FREE) == PlayerAction(Move.CHECK)

    def test_calls_a_bet(self, view):
        assert CallingPlayer().act(view, FACING_BET) == PlayerAction(Move.CALL, 4)

    def test_shoves_when_short(self, view):
        assert CallingPlayer().act(view, SHORT) == PlayerAction(Move.ALL_IN, 3)

    def test_posts_blind(self, view):
        blind = [PlayerAction(Move.BLIND, 2)]
        assert CallingPlayer().act(view, blind) == blind[0]


class TestRandomPlayer:
    def test_always_picks_an_offered_action(self, view):
        player = RandomPlayer(random.Random(5))
        for _ in range(50):
            assert player.act(view, FACING_BET) in FACING_BET

    def test_seeded_choices_repeat(self, view):
        a = RandomPlayer(random.Random(11))
        b = RandomPlayer(random.Random(11))
        assert [a.act(view, FACING_BET) for _ in range(20)] == [
            b.act(view, FACING_BET) for _ in range(20)
        ]


class TestChannelPlayer:
    def test_posts_request_and_returns_response(self, view):
        requests, responses = queue.Queue(), queue.Queue()
        player = ChannelPlayer(requests, responses)
        responses.put(PlayerAction(Move.CALL, 4))
        assert player.act(view, FACING_BET) == PlayerAction(Move.CALL, 4)
        request = requests.get_nowait()
        assert isinstance(request, DecisionRequest)
        assert request.seat == 0
        assert request.legal_actions == tuple(FACING_BET)

    def test_json_text_response(self, view):
        requests, responses = queue.Queue(), queue.Queue()
        player = ChannelPlayer(requests, responses)
        responses.put('I will raise. {"action": "raise", "amount": 12}')
        assert player.act(view, FACING_BET) == PlayerAction(Move.RAISE, 12)

    def test_malformed_text_is_bounced(self, view):
        requests, responses = queue.Queue(), queue.Queue()
        player = ChannelPlayer(requests, responses)
        responses.put("no idea")
        responses.put('{"action": "fold"}')
        assert player.act(view, FACING_BET) == PlayerAction(Move.FOLD)
        assert isinstance(requests.get_nowait(), DecisionRequest)
        bounced = requests.get_nowait()
        assert isinstance(bounced, ParseResult)
        assert not bounced.success

    def test_answers_from_another_thread(self, view):
        requests, responses = queue.Queue(), queue.Queue()
        player = ChannelPlayer(requests, responses)

        def presenter():
            request = requests.get(timeout=5)
            responses.put(request.legal_actions[1])

        thread = threading.Thread(target=presenter)
        thread.start()
        reply = player.act(view, FACING_BET)
        thread.join(timeout=5)
        assert reply == PlayerAction(Move.CALL, 4)
