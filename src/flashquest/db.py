"""SQLite persistence for the player, flashcards and saved quests."""
import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from flashquest.distribution import DifficultyDistribution
from flashquest.errors import DataUnavailable
from flashquest.models import DifficultyLevel, Flashcard
from flashquest.player import Player
from flashquest.progression import level_for_xp
from flashquest.quest import QuestConfig

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = str(Path.home() / ".flashquest" / "flashquest.db")

SCHEMA = """
CREATE TABLE IF NOT EXISTS player (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    current_level INTEGER NOT NULL DEFAULT 1,
    total_xp INTEGER NOT NULL DEFAULT 0,
    current_hp INTEGER NOT NULL DEFAULT 3,
    max_hp INTEGER NOT NULL DEFAULT 3,
    quests_completed INTEGER NOT NULL DEFAULT 0,
    perfect_quests INTEGER NOT NULL DEFAULT 0,
    flashcards_created INTEGER NOT NULL DEFAULT 0,
    java_questions_correct INTEGER NOT NULL DEFAULT 0,
    unlocked_titles TEXT DEFAULT '[]',
    active_title TEXT,
    date_created TEXT
);

CREATE TABLE IF NOT EXISTS flashcards (
    id TEXT PRIMARY KEY,
    question TEXT NOT NULL,
    answer TEXT NOT NULL,
    category TEXT NOT NULL,
    difficulty TEXT NOT NULL,
    times_asked INTEGER DEFAULT 0,
    times_correct INTEGER DEFAULT 0,
    date_created TEXT,
    position INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS quest_configs (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    question_count INTEGER NOT NULL,
    custom_hp INTEGER NOT NULL,
    category_filter TEXT DEFAULT '[]',
    easy_pct INTEGER NOT NULL,
    medium_pct INTEGER NOT NULL,
    hard_pct INTEGER NOT NULL
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


def _player_from_row(row: sqlite3.Row) -> Player:
    return Player(
        id=row["id"],
        name=row["name"],
        current_level=level_for_xp(max(0, row["total_xp"])),
        total_xp=max(0, row["total_xp"]),
        current_hp=max(0, row["current_hp"]),
        max_hp=max(1, row["max_hp"]),
        quests_completed=max(0, row["quests_completed"]),
        perfect_quests=max(0, row["perfect_quests"]),
        flashcards_created=max(0, row["flashcards_created"]),
        java_questions_correct=max(0, row["java_questions_correct"]),
        unlocked_titles=set(json.loads(row["unlocked_titles"] or "[]")),
        active_title=row["active_title"],
        date_created=row["date_created"],
    )


def _flashcard_from_row(row: sqlite3.Row) -> Flashcard:
    return Flashcard(
        id=row["id"],
        question=row["question"],
        answer=row["answer"],
        category=row["category"],
        difficulty=DifficultyLevel(row["difficulty"]),
        times_asked=row["times_asked"],
        times_correct=row["times_correct"],
        date_created=row["date_created"],
    )


def _quest_config_from_row(row: sqlite3.Row) -> QuestConfig:
    return QuestConfig(
        id=row["id"],
        name=row["name"],
        description=row["description"] or "",
        question_count=row["question_count"],
        custom_hp=row["custom_hp"],
        category_filter=frozenset(json.loads(row["category_filter"] or "[]")),
        difficulty_distribution=DifficultyDistribution(
            row["easy_pct"], row["medium_pct"], row["hard_pct"]
        ),
    )


class SqliteStore:
    """Store for a single save slot in one SQLite file.

    Loads return None or empty lists on a fresh database. Rows that cannot be
    decoded raise DataUnavailable.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        init_db(db_path)

    def load_player(self) -> Optional[Player]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute("SELECT * FROM player LIMIT 1").fetchone()
            return _player_from_row(row) if row else None
        except (sqlite3.DatabaseError, ValueError, TypeError) as e:
            logger.error("Failed to load player from %s: %s", self.db_path, e)
            raise DataUnavailable(f"Player data is unreadable: {e}") from e
        finally:
            conn.close()

    def save_player(self, player: Player) -> None:
        conn = get_connection(self.db_path)
        with conn:
            conn.execute("DELETE FROM player")
            conn.execute(
                """INSERT INTO player
                (id, name, current_level, total_xp, current_hp, max_hp, quests_completed,
                 perfect_quests, flashcards_created, java_questions_correct,
                 unlocked_titles, active_title, date_created)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    player.id, player.name, player.current_level, player.total_xp,
                    player.current_hp, player.max_hp, player.quests_completed,
                    player.perfect_quests, player.flashcards_created,
                    player.java_questions_correct,
                    json.dumps(player.titles_in_display_order()),
                    player.active_title, player.date_created,
                ),
            )
        conn.close()
        logger.debug("Saved player %s to %s", player.name, self.db_path)

    def load_flashcards(self) -> list[Flashcard]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute("SELECT * FROM flashcards ORDER BY position").fetchall()
            return [_flashcard_from_row(r) for r in rows]
        except (sqlite3.DatabaseError, ValueError, TypeError) as e:
            logger.error("Failed to load flashcards from %s: %s", self.db_path, e)
            raise DataUnavailable(f"Flashcard data is unreadable: {e}") from e
        finally:
            conn.close()

    def save_flashcards(self, flashcards: list[Flashcard]) -> None:
        conn = get_connection(self.db_path)
        with conn:
            conn.execute("DELETE FROM flashcards")
            conn.executemany(
                """INSERT INTO flashcards
                (id, question, answer, category, difficulty, times_asked, times_correct,
                 date_created, position)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                [
                    (c.id, c.question, c.answer, c.category, c.difficulty.value,
                     c.times_asked, c.times_correct, c.date_created, i)
                    for i, c in enumerate(flashcards)
                ],
            )
        conn.close()
        logger.debug("Saved %d flashcards to %s", len(flashcards), self.db_path)

    def load_quest_configs(self) -> list[QuestConfig]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute("SELECT * FROM quest_configs ORDER BY rowid").fetchall()
            return [_quest_config_from_row(r) for r in rows]
        except (sqlite3.DatabaseError, ValueError, TypeError) as e:
            logger.error("Failed to load quests from %s: %s", self.db_path, e)
            raise DataUnavailable(f"Quest data is unreadable: {e}") from e
        finally:
            conn.close()

    def save_quest_config(self, config: QuestConfig) -> None:
        dist = config.difficulty_distribution
        conn = get_connection(self.db_path)
        with conn:
            conn.execute(
                """INSERT OR REPLACE INTO quest_configs
                (id, name, description, question_count, custom_hp, category_filter,
                 easy_pct, medium_pct, hard_pct)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    config.id, config.name, config.description, config.question_count,
                    config.custom_hp, json.dumps(sorted(config.category_filter)),
                    dist.easy, dist.medium, dist.hard,
                ),
            )
        conn.close()

    def delete_all_data(self) -> None:
        conn = get_connection(self.db_path)
        with conn:
            conn.execute("DELETE FROM player")
            conn.execute("DELETE FROM flashcards")
            conn.execute("DELETE FROM quest_configs")
        conn.close()
        logger.info("All save data deleted from %s", self.db_path)
