"""Tests for the SQLite store."""
import pytest

from flashquest.db import init_db, get_connection, SqliteStore
from flashquest.distribution import DifficultyDistribution
from flashquest.errors import DataUnavailable
from flashquest.models import DifficultyLevel, Flashcard
from flashquest.player import Player
from flashquest.quest import QuestConfig


def test_init_db_creates_tables(tmp_db):
    init_db(tmp_db)
    conn = get_connection(tmp_db)
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
    )
    tables = [row[0] for row in cursor.fetchall()]
    conn.close()
    assert tables == ["flashcards", "player", "quest_configs"]


def test_init_db_idempotent(tmp_db):
    init_db(tmp_db)
    init_db(tmp_db)


def test_init_db_creates_parent_dir(tmp_path):
    db_path = str(tmp_path / "nested" / "dir" / "save.db")
    init_db(db_path)
    assert (tmp_path / "nested" / "dir" / "save.db").exists()


def test_fresh_store_is_empty(tmp_db):
    store = SqliteStore(tmp_db)
    assert store.load_player() is None
    assert store.load_flashcards() == []
    assert store.load_quest_configs() == []


def test_player_roundtrip(tmp_db):
    store = SqliteStore(tmp_db)
    player = Player(name="Ada")
    player.add_xp(300)
    player.set_custom_hp(5)
    player.take_damage(1)
    player.unlock_title("Survivor")
    player.set_active_title("Survivor")
    for _ in range(3):
        player.complete_quest(True)
    store.save_player(player)

    loaded = store.load_player()
    assert loaded == player


def test_save_player_replaces_previous(tmp_db):
    store = SqliteStore(tmp_db)
    store.save_player(Player(name="Ada"))
    store.save_player(Player(name="Grace"))
    conn = get_connection(tmp_db)
    assert conn.execute("SELECT COUNT(*) FROM player").fetchone()[0] == 1
    conn.close()
    assert store.load_player().name == "Grace"


def test_flashcards_keep_order_and_stats(tmp_db):
    store = SqliteStore(tmp_db)
    cards = [
        Flashcard(question="Q1?", answer="A1", category="Concurrency", difficulty=DifficultyLevel.HARD),
        Flashcard(question="Q2?", answer="A2", category="Java Basics", difficulty=DifficultyLevel.EASY),
    ]
    cards[0].record_answer(True)
    cards[0].record_answer(False)
    store.save_flashcards(cards)

    loaded = store.load_flashcards()
    assert [c.id for c in loaded] == [c.id for c in cards]
    assert loaded[0].times_asked == 2
    assert loaded[0].times_correct == 1
    assert loaded[0].difficulty == DifficultyLevel.HARD
    assert loaded[1].question == "Q2?"


def test_save_flashcards_replaces_deck(tmp_db):
    store = SqliteStore(tmp_db)
    store.save_flashcards([Flashcard(question="old", answer="", category="X")])
    store.save_flashcards([Flashcard(question="new", answer="", category="X")])
    assert [c.question for c in store.load_flashcards()] == ["new"]


def test_quest_config_roundtrip(tmp_db):
    store = SqliteStore(tmp_db)
    config = QuestConfig(
        name="Threads",
        question_count=7,
        custom_hp=4,
        category_filter=frozenset({"Concurrency", "Java Basics"}),
        difficulty_distribution=DifficultyDistribution.hard_focus(),
        description="Concurrency drill",
    )
    store.save_quest_config(config)
    store.save_quest_config(config)
    loaded = store.load_quest_configs()
    assert loaded == [config]


def test_player_level_derived_from_total_xp(tmp_db):
    store = SqliteStore(tmp_db)
    store.save_player(Player(name="Ada", total_xp=250))
    conn = get_connection(tmp_db)
    conn.execute("UPDATE player SET current_level = 9")
    conn.commit()
    conn.close()
    assert store.load_player().current_level == 3


def test_corrupt_player_row_raises_data_unavailable(tmp_db):
    store = SqliteStore(tmp_db)
    store.save_player(Player(name="Ada"))
    conn = get_connection(tmp_db)
    conn.execute("UPDATE player SET unlocked_titles = 'not json'")
    conn.commit()
    conn.close()
    with pytest.raises(DataUnavailable):
        store.load_player()


def test_corrupt_flashcard_row_raises_data_unavailable(tmp_db):
    store = SqliteStore(tmp_db)
    store.save_flashcards([Flashcard(question="Q", answer="A", category="X")])
    conn = get_connection(tmp_db)
    conn.execute("UPDATE flashcards SET difficulty = 'IMPOSSIBLE'")
    conn.commit()
    conn.close()
    with pytest.raises(DataUnavailable):
        store.load_flashcards()


def test_delete_all_data(tmp_db):
    store = SqliteStore(tmp_db)
    store.save_player(Player(name="Ada"))
    store.save_flashcards([Flashcard(question="Q", answer="A", category="X")])
    store.save_quest_config(QuestConfig(name="q"))
    store.delete_all_data()
    assert store.load_player() is None
    assert store.load_flashcards() == []
    assert store.load_quest_configs() == []
