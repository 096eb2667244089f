"""
quizdrill CLI: adaptive multiple choice practice in the terminal.

Commands:
- quizdrill practice BANK   - Run an adaptive practice session
- quizdrill simulate        - Simulate sessions to inspect scheduler behaviour
- quizdrill inspect BANK    - Show question counts per block

Usage:
    quizdrill practice questions.json --count 15
    quizdrill practice questions.json --block "Chapter 2" --seed 7
    quizdrill simulate -n 20 -a 0.7 -r 500
"""
from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt
from rich.table import Table

from quizdrill.config import Settings, get_settings
from quizdrill.core.errors import QuizDrillError
from quizdrill.scheduling.adaptive_scheduler import SchedulerConfig
from quizdrill.study.practice_session import PracticeSession, SessionResults
from quizdrill.study.question_bank import Question, QuestionBank
from quizdrill.study.simulation import run_simulation


# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="quizdrill",
    help="quizdrill: adaptive multiple choice practice",
    no_args_is_help=True,
)
console = Console()


STYLES = {
    "correct": "bold green",
    "incorrect": "bold red",
    "info": "bold cyan",
    "warning": "bold yellow",
    "dim": "dim",
}


def configure_logging(settings: Settings) -> None:
    """Route loguru output to stderr (and optionally a file)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level=settings.log_level, rotation="1 MB")


def _settings_with_seed(seed: int | None) -> Settings:
    settings = get_settings()
    if seed is not None:
        settings = settings.model_copy(update={"seed": seed})
    return settings


def _fail(error: QuizDrillError) -> NoReturn:
    logger.error(str(error))
    console.print(f"[{STYLES['incorrect']}]Error:[/] {error}")
    raise typer.Exit(code=1)


# =============================================================================
# Display Helpers
# =============================================================================

def display_question(question: Question, session: PracticeSession) -> None:
    """Display a question with numbered answer options."""
    stats = session.scheduler.get_stats()
    perf = session.performance_for_current()
    header = (
        f"Question {session.current_id + 1}/{len(session.questions)}  |  "
        f"Answered {stats.total_attempts}  |  Correct {stats.total_correct}"
    )
    if perf.is_attempted:
        header += f"  |  Last {perf.last_result.symbol}"
    if perf.ever_missed:
        header += "  |  [yellow]review[/yellow]"

    content = question.text + "\n\n"
    for i, answer in enumerate(question.answers, start=1):
        content += f"  {i}. {answer}\n"

    console.print(Panel(
        content.rstrip(),
        title=header,
        title_align="left",
        border_style="cyan",
        padding=(1, 2),
    ))


def display_feedback(question: Question, is_correct: bool) -> None:
    """Display whether the answer was right, and the right answer if not."""
    if is_correct:
        console.print(f"[{STYLES['correct']}]✓ Correct[/]")
    else:
        correct_text = question.answers[question.correct_answer]
        console.print(
            f"[{STYLES['incorrect']}]✗ Incorrect[/] - "
            f"answer: {question.correct_answer + 1}. {correct_text}"
        )


def display_results(results: SessionResults, completed: bool = True) -> None:
    """Display the session summary and the questions that were missed."""
    title = results.verdict if completed else "Session ended early"
    console.print()
    console.print(Panel(
        f"[bold]{results.percentage}%[/bold] right on the first try\n"
        f"{results.first_try_correct} of {results.total_questions} questions, "
        f"{results.total_submissions} answers in total",
        title=f"[bold]{title}[/bold]",
        border_style="green" if completed else "yellow",
    ))

    if results.wrong_answers:
        table = Table(title="Missed questions")
        table.add_column("#", justify="right")
        table.add_column("Question")
        table.add_column("Missed", justify="right")
        for wrong in results.wrong_answers:
            table.add_row(str(wrong.question_number), wrong.question_text, str(wrong.times_missed))
        console.print(table)


# =============================================================================
# Commands
# =============================================================================

@app.command()
def practice(
    bank: Annotated[Path, typer.Argument(help="Question bank JSON file")],
    count: Annotated[
        Optional[int], typer.Option("--count", "-n", min=1, help="Questions in the session")
    ] = None,
    block: Annotated[
        Optional[str], typer.Option("--block", "-b", help="Only draw from this block")
    ] = None,
    seed: Annotated[
        Optional[int], typer.Option("--seed", help="Seed for a reproducible session")
    ] = None,
) -> None:
    """
    Run an adaptive practice session.

    Missed questions come back until they are answered correctly again,
    then once or twice more before the session ends.
    """
    settings = _settings_with_seed(seed)

    try:
        question_bank = QuestionBank.load(bank)
        session = PracticeSession.from_bank(
            question_bank,
            count=count,
            block=block,
            settings=settings,
            rng=random.Random(settings.seed),
        )
        session.start()
    except QuizDrillError as e:
        _fail(e)

    try:
        while True:
            question = session.current_question
            display_question(question, session)
            answer = IntPrompt.ask(
                "Your answer",
                choices=[str(i) for i in range(1, len(question.answers) + 1)],
                console=console,
            )
            display_feedback(question, session.submit(answer - 1))

            if session.advance() is None:
                break
    except QuizDrillError as e:
        _fail(e)
    except (KeyboardInterrupt, EOFError):
        console.print(f"\n[{STYLES['warning']}]Session abandoned[/]")
        if session.scheduler.submission_count:
            display_results(session.results(), completed=False)
        raise typer.Exit(code=130)

    display_results(session.results())


@app.command()
def simulate(
    questions: Annotated[
        int, typer.Option("--questions", "-n", min=1, help="Questions per session")
    ] = 20,
    accuracy: Annotated[
        float, typer.Option("--accuracy", "-a", min=0.01, max=1.0, help="Chance of a correct answer")
    ] = 0.7,
    runs: Annotated[
        int, typer.Option("--runs", "-r", min=1, help="Sessions to simulate")
    ] = 100,
    policy: Annotated[
        Optional[str], typer.Option("--policy", "-p", help="Repeat policy: random or fixed")
    ] = None,
    seed: Annotated[
        Optional[int], typer.Option("--seed", help="Seed for reproducible runs")
    ] = None,
) -> None:
    """Simulate sessions with a fixed answer accuracy and summarize them."""
    settings = _settings_with_seed(seed)

    try:
        if policy is not None:
            settings = settings.model_copy(update={"repeat_policy": policy})
        config = SchedulerConfig.from_settings(settings)
        summary = run_simulation(
            question_count=questions,
            accuracy=accuracy,
            runs=runs,
            config=config,
            seed=settings.seed,
        )
    except QuizDrillError as e:
        _fail(e)

    table = Table(title=f"Simulation: {questions} questions at {accuracy:.0%} accuracy")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Policy", repr(config.repeat_policy))
    table.add_row("Runs completed", f"{summary.completed_runs}/{runs}")
    table.add_row("Min submissions", str(summary.min_submissions))
    table.add_row("Mean submissions", f"{summary.mean_submissions:.1f}")
    table.add_row("Max submissions", str(summary.max_submissions))
    gap = summary.min_repeat_gap
    table.add_row("Smallest repeat gap", "-" if gap is None else str(gap))
    console.print(table)


@app.command()
def inspect(
    bank: Annotated[Path, typer.Argument(help="Question bank JSON file")],
) -> None:
    """Show how many questions each block of a bank holds."""
    try:
        question_bank = QuestionBank.load(bank)
    except QuizDrillError as e:
        _fail(e)

    table = Table(title=f"{bank.name}: {len(question_bank)} questions")
    table.add_column("Block")
    table.add_column("Questions", justify="right")
    for name, total in question_bank.blocks().items():
        table.add_row(name or "[dim](none)[/dim]", str(total))
    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    configure_logging(get_settings())
    app()


if __name__ == "__main__":
    main()
