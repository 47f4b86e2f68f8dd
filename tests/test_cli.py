"""Tests for the command-line entry point."""

import json
import sys

import main


def test_headless_session_exports_hands(tmp_path):
    export = tmp_path / "session.json"
    game = main.run_headless(5, 3, seed=1, export_stats=str(export))

    assert 1 <= len(game.histories) <= 5
    data = json.loads(export.read_text(encoding="utf-8"))
    assert data["seed"] == 1
    assert len(data["hands"]) == len(game.histories)
    assert sum(p["chips"] for p in data["players"]) == 3000


def test_headless_tournament_is_reproducible():
    first = main.run_headless(8, 4, seed=5, tournament=True)
    second = main.run_headless(8, 4, seed=5, tournament=True)
    assert [p.chips for p in first.state.players] == [p.chips for p in second.state.players]
    assert first.settings.game_type.value == "tournament"


def test_main_headless_flag(monkeypatch):
    calls = {}

    def fake_run_headless(hands, players, seed=None, tournament=False, export_stats=None):
        calls.update(hands=hands, players=players, seed=seed, tournament=tournament)

    monkeypatch.setattr(main, "run_headless", fake_run_headless)
    monkeypatch.setattr(
        sys, "argv", ["main.py", "--headless", "--hands", "3", "--players", "4", "--seed", "9"]
    )
    main.main()
    assert calls == {"hands": 3, "players": 4, "seed": 9, "tournament": False}
