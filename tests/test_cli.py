import json

import pytest

from rocket_shooter import shooter_env
from rocket_shooter.__main__ import main


@pytest.fixture
def episodes(monkeypatch):
    calls = []

    def fake_episode(render=False, seed=None, game_config=None):
        calls.append({"seed": seed, "game_config": game_config})
        return {"score": 10, "kills": 0, "step": 5, "return": 0.5}

    monkeypatch.setattr(shooter_env, "run_random_episode", fake_episode)
    return calls


def test_headless_uses_config_file(tmp_path, episodes, capsys):
    path = tmp_path / "game.json"
    path.write_text(json.dumps({"initial_ammo": 40, "max_health": 150}))

    main(["--headless", "-n", "2", "--seed", "7", "--config", str(path)])

    assert [c["seed"] for c in episodes] == [7, 8]
    for call in episodes:
        assert call["game_config"]["initial_ammo"] == 40
        assert call["game_config"]["max_health"] == 150
    assert "Episode 2/2" in capsys.readouterr().out


def test_headless_rejects_high_score_file(tmp_path, episodes):
    with pytest.raises(SystemExit):
        main(["--headless", "--high-score-file", str(tmp_path / "hs.json")])
    assert episodes == []


def test_bad_config_file_fails_before_running(tmp_path, episodes):
    path = tmp_path / "game.json"
    path.write_text(json.dumps({"spread_bullets": 5.0}))
    with pytest.raises(ValueError):
        main(["--headless", "--config", str(path)])
    assert episodes == []
