"""Interactive CLI application."""
import logging
import os

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt, IntPrompt
from rich.table import Table

from flashquest.db import SqliteStore, DEFAULT_DB_PATH
from flashquest.distribution import PRESETS
from flashquest.errors import FlashQuestError
from flashquest.game import GameCoordinator
from flashquest.models import DifficultyLevel
from flashquest.quest import QuestConfig, QuestSession, MIN_QUESTIONS, MAX_QUESTIONS
from flashquest.dashboard import (
    get_player_stats, get_category_stats, get_weak_categories,
    get_accuracy_color, get_hp_color,
)

console = Console()

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """Raised when the player leaves a quest from a prompt."""


def session_prompt(text: str, **kwargs) -> str:
    answer = Prompt.ask(text, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def show_welcome():
    console.print(Panel(
        "[bold]FlashQuest[/bold]\n[dim]Level up by answering flashcards[/dim]",
        title="Welcome", border_style="magenta",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("play", "Quick quest (10 questions)"),
        ("quest", "Design a custom quest"),
        ("saved", "Replay a saved quest"),
        ("add", "Create a flashcard"),
        ("stats", "Player profile + category accuracy"),
        ("title", "Choose your active title"),
        ("reset", "Delete all data and start over"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_status(game: GameCoordinator, session: QuestSession):
    player = game.player
    hp_color = get_hp_color(player.current_hp, player.max_hp)
    console.print(
        f"[{hp_color}]HP {'♥' * player.current_hp}{'♡' * (player.max_hp - player.current_hp)}[/{hp_color}]"
        f"  |  Question {session.current_index + 1}/{len(session.question_pool)}"
        f"  |  XP this quest: {session.total_xp_earned}"
    )


def run_quest(game: GameCoordinator, session: QuestSession) -> None:
    console.print(f"\n[bold]{session.name}[/bold] — {len(session.question_pool)} questions\n")
    try:
        while game.active_quest is session:
            card = session.current_flashcard()
            show_status(game, session)
            diff = card.difficulty
            console.print(Panel(
                card.question,
                title=f"{card.category} · [{diff.color}]{diff.display_name}[/{diff.color}]",
                border_style="cyan",
            ))
            session_prompt("[dim]Press Enter to reveal answer[/dim]", default="")
            console.print(Panel(card.answer, border_style="green"))
            answer = session_prompt("Did you get it right?", choices=["y", "n", "q"])
            level_before = game.player.current_level
            result = game.process_answer(answer == "y")
            if result.error:
                console.print("[red bold]You ran out of HP. Quest failed![/red bold]")
                return
            if result.xp_earned:
                console.print(f"[green]+{result.xp_earned} XP[/green]")
            else:
                console.print("[red]-1 HP[/red]")
            if result.quest_complete:
                show_quest_summary(game, session, level_before)
    except SessionExitRequested:
        game.abandon_quest()
        console.print("[dim]Quest abandoned. Card statistics were kept.[/dim]")


def show_quest_summary(game: GameCoordinator, session: QuestSession, level_before: int):
    player = game.player
    lines = [
        f"Correct: [bold]{session.correct_answers}/{len(session.question_pool)}[/bold]",
        f"XP earned: [bold]{session.total_xp_earned}[/bold]",
    ]
    if session.is_perfect_quest():
        lines.append("[magenta]Perfect quest![/magenta]")
    if player.current_level > level_before:
        lines.append(f"[yellow bold]LEVEL UP! You are now level {player.current_level}[/yellow bold]")
    console.print(Panel("\n".join(lines), title="Quest Complete", border_style="green"))


def cmd_play(game: GameCoordinator):
    run_quest(game, game.start_quick_quest())


def cmd_quest(game: GameCoordinator):
    console.print("\n[bold]Quest Designer[/bold]")
    name = Prompt.ask("Quest name", default="Custom Quest")
    count = IntPrompt.ask(f"Number of questions ({MIN_QUESTIONS}-{MAX_QUESTIONS})", default=10)
    hp = IntPrompt.ask("Starting HP", default=3)
    categories = game.available_categories()
    for i, category in enumerate(categories, 1):
        console.print(f"  [cyan]{i}[/cyan]) {category}")
    picked = Prompt.ask("Categories (comma separated numbers, blank for all)", default="")
    category_filter = {
        categories[int(p) - 1] for p in picked.split(",")
        if p.strip().isdigit() and 0 < int(p) <= len(categories)
    }
    preset = Prompt.ask("Difficulty mix", choices=list(PRESETS), default="default")
    config = QuestConfig(
        name=name,
        question_count=count,
        custom_hp=hp,
        category_filter=frozenset(category_filter),
        difficulty_distribution=PRESETS[preset](),
    )
    save = Prompt.ask("Save this quest for later?", choices=["y", "n"], default="n") == "y"
    session = game.start_quest(config)
    if save:
        game.save_quest_config(config)
    run_quest(game, session)


def cmd_saved(game: GameCoordinator):
    if not game.saved_quests:
        console.print("[yellow]No saved quests yet. Use 'quest' to design one.[/yellow]")
        return
    for i, config in enumerate(game.saved_quests, 1):
        console.print(
            f"  [cyan]{i}[/cyan]) {config.name} — {config.question_count} questions, "
            f"{config.custom_hp} HP, {config.difficulty_distribution}"
        )
    choice = IntPrompt.ask("Select quest", choices=[str(i) for i in range(1, len(game.saved_quests) + 1)])
    run_quest(game, game.start_quest(game.saved_quests[choice - 1]))


def cmd_add(game: GameCoordinator):
    question = Prompt.ask("Question")
    answer = Prompt.ask("Answer")
    category = Prompt.ask("Category", default="General")
    difficulty = Prompt.ask("Difficulty", choices=[d.value.lower() for d in DifficultyLevel], default="medium")
    game.add_flashcard(question, answer, category, DifficultyLevel(difficulty.upper()))
    console.print(f"[green]Flashcard added. Deck size: {len(game.flashcards)}[/green]")


def cmd_stats(game: GameCoordinator):
    stats = get_player_stats(game.player)
    header = f"[bold]{stats['name']}[/bold]"
    if stats["active_title"]:
        header += f"  {stats['active_title']}"
    bar_filled = int(stats["level_progress"] / 5)
    bar = f"[magenta]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/magenta]"
    console.print(Panel(
        f"{header}\nLevel [bold]{stats['level']}[/bold] {bar} "
        f"{stats['total_xp']}/{stats['xp_for_next_level']} XP\n"
        f"Quests: [bold]{stats['quests_completed']}[/bold]  |  "
        f"Perfect: [bold]{stats['perfect_quests']}[/bold]  |  "
        f"Cards created: [bold]{stats['flashcards_created']}[/bold]\n"
        f"Titles: {', '.join(stats['titles']) or '[dim]none yet[/dim]'}",
        title="Player Profile", border_style="magenta",
    ))

    table = Table(title="Category Accuracy")
    table.add_column("Category", style="cyan")
    table.add_column("Cards", justify="right")
    table.add_column("Answered", justify="right")
    table.add_column("Accuracy", justify="right")
    for cs in get_category_stats(game.flashcards):
        color = get_accuracy_color(cs["score"])
        table.add_row(cs["category"], str(cs["cards"]), str(cs["asked"]), f"[{color}]{cs['score']}%[/{color}]")
    console.print(table)

    weak = get_weak_categories(game.flashcards)
    if weak:
        console.print(f"\n  [yellow]Recommendation: Focus on {weak[0]['category']}[/yellow]")


def cmd_title(game: GameCoordinator):
    titles = game.player.titles_in_display_order()
    if not titles:
        console.print("[yellow]No titles unlocked yet.[/yellow]")
        return
    choice = Prompt.ask("Active title", choices=titles + ["none"], default="none")
    game.set_active_title(None if choice == "none" else choice)


def cmd_reset(game: GameCoordinator):
    console.print("[red bold]This deletes your player, every flashcard and all saved quests.[/red bold]")
    if Prompt.ask("Type DELETE to confirm", default="") != "DELETE":
        console.print("[dim]Nothing was deleted.[/dim]")
        return
    game.delete_all_data()
    game.initialize()
    console.print("[green]All data deleted.[/green]")
    first_time_setup(game)


def first_time_setup(game: GameCoordinator):
    console.print("[dim]No save found. Let's create your hero.[/dim]")
    while not game.has_player():
        try:
            game.create_new_player(Prompt.ask("Player name"))
        except FlashQuestError as e:
            console.print(f"[red]{e}[/red]")
    console.print(f"[green]Welcome, {game.player.name}![/green]\n")


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    db_path = os.environ.get("FLASHQUEST_DB", DEFAULT_DB_PATH)
    game = GameCoordinator(SqliteStore(db_path))
    game.initialize()

    show_welcome()
    if not game.has_player():
        first_time_setup(game)

    commands = {
        "play": cmd_play,
        "quest": cmd_quest,
        "saved": cmd_saved,
        "add": cmd_add,
        "stats": cmd_stats,
        "title": cmd_title,
        "reset": cmd_reset,
    }
    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="play").strip().lower()
        try:
            if choice in commands:
                commands[choice](game)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Your progress is saved. See you next quest![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except FlashQuestError as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
