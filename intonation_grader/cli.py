"""CLI entrypoint for the intonation-grader command."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import numpy as np
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .analyzer import ContourAnalyzer
from .config import AnalyzerConfig, load_config
from .data import load_audio
from .models import ContourComparison
from .types import AudioDecodeError, InvalidInputError

app = typer.Typer(help="Compare the intonation of a recording against a reference")
console = Console()


def _build_analyzer(aligner: Optional[str], band: Optional[float]) -> ContourAnalyzer:
    settings = load_config()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    overrides = {}
    if aligner is not None:
        overrides["aligner"] = aligner
    if band is not None:
        overrides["band_fraction"] = band

    try:
        config = AnalyzerConfig.model_validate({**settings.analyzer.model_dump(), **overrides})
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)
    return ContourAnalyzer(config)


def _print_summary(comparison: ContourComparison) -> None:
    voiced_ref = sum(1 for p in comparison.reference if p.value != 0)
    voiced_user = sum(1 for p in comparison.user if p.value != 0)

    table = Table(title="Contour comparison")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Frames", str(len(comparison)))
    table.add_row("Voiced (reference)", str(voiced_ref))
    table.add_row("Voiced (attempt)", str(voiced_user))
    table.add_row("Mean deviation", f"{comparison.mean_abs_difference():.1f}")
    table.add_row("Fallback", "yes" if comparison.is_fallback else "no")
    if comparison.warnings:
        table.add_row("Warnings", ", ".join(comparison.warnings))
    console.print(table)


@app.command()
def compare(
    reference: Annotated[Path, typer.Argument(help="Reference audio file")],
    attempt: Annotated[Path, typer.Argument(help="Recorded attempt")],
    output: Annotated[Optional[Path], typer.Option(help="Write comparison JSON here")] = None,
    aligner: Annotated[Optional[str], typer.Option(help="Aligner: dtw or padded")] = None,
    band: Annotated[Optional[float], typer.Option(help="DTW band as fraction of length")] = None,
    fallback: Annotated[
        bool, typer.Option("--fallback/--no-fallback", help="Use placeholder contours if decoding fails")
    ] = True,
) -> None:
    """Align the pitch contour of ATTEMPT onto REFERENCE."""
    analyzer = _build_analyzer(aligner, band)

    try:
        if fallback:
            comparison = analyzer.analyze_or_fallback(
                lambda: load_audio(reference),
                lambda: load_audio(attempt),
            )
        else:
            comparison = analyzer.analyze(load_audio(reference), load_audio(attempt))
    except (AudioDecodeError, InvalidInputError) as e:
        console.print(f"[red]Analysis failed:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    _print_summary(comparison)

    if output is not None:
        comparison.to_json_file(output)
        console.print(f"[green]Wrote comparison to {output}[/green]")


@app.command()
def contour(
    audio: Annotated[Path, typer.Argument(help="Audio file to analyze")],
) -> None:
    """Print statistics of the raw pitch contour of AUDIO."""
    analyzer = _build_analyzer(None, None)

    try:
        raw = analyzer.extract(load_audio(audio))
    except (AudioDecodeError, InvalidInputError) as e:
        console.print(f"[red]Analysis failed:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    voiced = raw[raw > 0]
    console.print(f"[bold]{audio}[/bold]: {len(raw)} frames, {len(voiced)} voiced")
    if len(raw) > 0:
        console.print(f"Voiced ratio: {len(voiced) / len(raw):.2f}")
    if len(voiced) > 0:
        console.print(
            f"F0: min {voiced.min():.1f} Hz, median {np.median(voiced):.1f} Hz, "
            f"max {voiced.max():.1f} Hz"
        )


if __name__ == "__main__":
    app()
