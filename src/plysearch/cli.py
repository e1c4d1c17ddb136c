"""Command-line interface for plysearch."""

from dataclasses import replace
from pathlib import Path

import chess
import typer
from rich.console import Console
from rich.table import Table

from plysearch import __version__
from plysearch.core.configs import EngineConfig, load_engine_config
from plysearch.core.utils.logging import setup_logging
from plysearch.games import ChessPosition, Flags, TicTacToe
from plysearch.search import AlphaBetaEngine, SearchResult
from plysearch.tournament import GameConfig, GameRunner

app = typer.Typer(
    name="plysearch",
    help="plysearch: game-agnostic alpha-beta search",
    add_completion=False,
)
console = Console()

GAMES = {
    "tictactoe": TicTacToe,
    "flags": Flags,
}

# Positions used by `bench`: opening, a middlegame and a mate in one.
BENCH_FENS = [
    chess.STARTING_FEN,
    "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
    "6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1",
]


def _setup(config_path: Path | None, overrides: list[str] | None, verbose: bool) -> EngineConfig:
    """Load configuration and configure logging."""
    config = load_engine_config(config_path, overrides)
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(
        level=level,
        log_file=config.logging.file,
        rotation=config.logging.rotation,
        retention=config.logging.retention,
    )
    return config


def _print_result(title: str, result: SearchResult) -> None:
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("best move", str(result.best_move))
    table.add_row("evaluation", str(result.evaluation))
    table.add_row("depth", str(result.depth))
    table.add_row("nodes", str(result.nodes))
    table.add_row("time", f"{result.elapsed:.3f}s")
    table.add_row("tree exhausted", str(result.exhausted_tree))
    table.add_row("fallback", str(result.fallback))
    console.print(table)


@app.command()
def version() -> None:
    """Print version information."""
    console.print(f"[bold blue]plysearch[/bold blue] v{__version__}")


@app.command()
def play(
    game: str = typer.Argument("tictactoe", help=f"Game to play: {', '.join(GAMES)}"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    override: list[str] | None = typer.Option(None, "--set", help="Config override, e.g. search.parallel=true"),
    max_moves: int = typer.Option(200, "--max-moves", help="Stop the game after this many moves"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Let the engine play a game against itself."""
    if game not in GAMES:
        console.print(f"[red]Unknown game {game!r}. Choose from: {', '.join(GAMES)}[/red]")
        raise typer.Exit(code=1)

    engine_config = _setup(config, override, verbose)
    engine = AlphaBetaEngine(engine_config.search)
    runner = GameRunner(GameConfig(max_moves=max_moves))

    console.print(f"[bold green]Self-play[/bold green]: {game} with {engine.name}")
    record = runner.play_game(engine, engine, GAMES[game]())

    console.print(str(record.final_position))
    console.print(f"Moves: {' '.join(str(m) for m in record.moves)}")
    console.print(f"Termination: [bold]{record.termination.value}[/bold], score for first player: {record.score_a}")


@app.command()
def analyze(
    fen: str = typer.Argument(chess.STARTING_FEN, help="Chess position in FEN"),
    depth: int | None = typer.Option(None, "--depth", "-d", help="Fixed search depth"),
    time_limit: float | None = typer.Option(None, "--time", "-t", help="Time budget in seconds"),
    steps: int | None = typer.Option(None, "--steps", "-n", help="Node visit budget"),
    parallel: bool = typer.Option(False, "--parallel", "-p", help="Search root moves in parallel"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    override: list[str] | None = typer.Option(None, "--set", help="Config override, e.g. search.max_workers=4"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Search a chess position and print the best move."""
    limits = [limit for limit in (depth, time_limit, steps) if limit is not None]
    if len(limits) > 1:
        console.print("[red]Use only one of --depth, --time and --steps[/red]")
        raise typer.Exit(code=1)

    try:
        position = ChessPosition.from_fen(fen)
    except ValueError as e:
        console.print(f"[red]Invalid FEN: {e}[/red]")
        raise typer.Exit(code=1) from e

    engine_config = _setup(config, override, verbose)
    search_config = replace(engine_config.search, parallel=True) if parallel else engine_config.search
    engine = AlphaBetaEngine(search_config)

    if depth is not None:
        result = engine.search_complete(position, depth)
    elif time_limit is not None:
        result = engine.search_time_bounded(position, time_limit)
    elif steps is not None:
        result = engine.search_step_bounded(position, steps)
    else:
        result = engine.search_time_bounded(position, engine_config.search.default_time_limit or 1.0)

    console.print(str(position))
    _print_result(engine.name, result)


@app.command()
def bench(
    steps: int = typer.Option(20_000, "--steps", "-n", help="Node visit budget per position"),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Parallel pool size"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Compare sequential and parallel search on fixed chess positions."""
    engine_config = _setup(config, None, verbose)

    table = Table(title=f"Bench ({steps} node visits per position)")
    table.add_column("Position", style="cyan")
    table.add_column("Mode")
    table.add_column("Move")
    table.add_column("Depth", justify="right")
    table.add_column("Nodes", justify="right")
    table.add_column("Time", justify="right")

    for index, fen in enumerate(BENCH_FENS, start=1):
        for parallel in (False, True):
            search_config = replace(engine_config.search, parallel=parallel)
            if workers is not None:
                search_config = replace(search_config, max_workers=workers)
            engine = AlphaBetaEngine(search_config)
            result = engine.search_step_bounded(ChessPosition.from_fen(fen), steps)
            table.add_row(
                f"#{index}",
                engine.name,
                str(result.best_move),
                str(result.depth),
                str(result.nodes),
                f"{result.elapsed:.3f}s",
            )

    console.print(table)


if __name__ == "__main__":
    app()
