import random

import pytest
from unittest.mock import patch

from flashquest.app import (
    SessionExitRequested, session_prompt, run_quest, cmd_add, cmd_quest, cmd_reset, cmd_title,
)
from flashquest.db import SqliteStore
from flashquest.errors import InsufficientFlashcards
from flashquest.game import GameCoordinator
from flashquest.models import QuestStatus


@pytest.fixture
def game(tmp_db):
    g = GameCoordinator(SqliteStore(tmp_db), rng=random.Random(0))
    g.initialize()
    g.create_new_player("Ada")
    return g


def test_session_exit_requested_is_exception():
    with pytest.raises(SessionExitRequested):
        raise SessionExitRequested()


def test_session_prompt_raises_on_q():
    with patch("flashquest.app.Prompt.ask", return_value="q"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_raises_on_menu():
    with patch("flashquest.app.Prompt.ask", return_value="menu"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_returns_normal_input():
    with patch("flashquest.app.Prompt.ask", return_value="hello"):
        assert session_prompt("test prompt") == "hello"


def test_run_quest_all_correct(game):
    session = game.start_quick_quest()
    answers = ["", "y"] * 10
    with patch("flashquest.app.Prompt.ask", side_effect=answers):
        run_quest(game, session)
    assert session.status == QuestStatus.COMPLETED
    assert game.player.quests_completed == 1
    assert game.active_quest is None


def test_run_quest_stops_when_hp_runs_out(game):
    session = game.start_quick_quest()
    answers = ["", "n"] * 3
    with patch("flashquest.app.Prompt.ask", side_effect=answers):
        run_quest(game, session)
    assert session.status == QuestStatus.FAILED
    assert game.player.current_hp == 0
    assert game.active_quest is None


def test_run_quest_exits_on_q(game):
    session = game.start_quick_quest()
    # Card 1: reveal, answer right. Card 2: 'q' on reveal.
    with patch("flashquest.app.Prompt.ask", side_effect=["", "y", "q"]):
        run_quest(game, session)
    assert session.status == QuestStatus.FAILED
    assert game.active_quest is None
    assert session.question_pool[0].times_asked == 1
    assert game.player.quests_completed == 0


def test_cmd_add(game):
    before = len(game.flashcards)
    with patch("flashquest.app.Prompt.ask", side_effect=["What is PEP 8?", "Style guide", "Python", "easy"]):
        cmd_add(game)
    assert len(game.flashcards) == before + 1
    assert game.flashcards[-1].category == "Python"
    assert game.player.flashcards_created == 1


def test_cmd_title(game):
    game.player.unlock_title("Survivor")
    with patch("flashquest.app.Prompt.ask", return_value="Survivor"):
        cmd_title(game)
    assert game.player.active_title == "Survivor"


def test_cmd_quest_saves_config_after_start(game, tmp_db):
    # name, count, hp, categories (3 = Concurrency), mix, save; then quit the quest
    with patch("flashquest.app.Prompt.ask", side_effect=["Threads", "3", "default", "y", "q"]), \
            patch("flashquest.app.IntPrompt.ask", side_effect=[5, 3]):
        cmd_quest(game)
    assert [q.name for q in game.saved_quests] == ["Threads"]
    assert [q.name for q in SqliteStore(tmp_db).load_quest_configs()] == ["Threads"]


def test_cmd_quest_does_not_save_unstartable_quest(game, tmp_db):
    with patch("flashquest.app.Prompt.ask", side_effect=["Threads", "3", "default", "y"]), \
            patch("flashquest.app.IntPrompt.ask", side_effect=[20, 3]):
        with pytest.raises(InsufficientFlashcards):
            cmd_quest(game)
    assert game.saved_quests == []
    assert SqliteStore(tmp_db).load_quest_configs() == []


def test_cmd_reset_deletes_and_creates_new_player(game, tmp_db):
    game.player.complete_quest(True)
    game.save()
    with patch("flashquest.app.Prompt.ask", side_effect=["DELETE", "Grace"]):
        cmd_reset(game)
    assert game.player.name == "Grace"
    assert game.player.quests_completed == 0
    assert len(game.flashcards) == 33
    assert SqliteStore(tmp_db).load_player().name == "Grace"


def test_cmd_reset_requires_confirmation(game):
    with patch("flashquest.app.Prompt.ask", side_effect=["no"]):
        cmd_reset(game)
    assert game.player.name == "Ada"
