"""CLI entry point for stillgrab.

Usage:
    stillgrab extract input.mp4 2 5 5      # every 5th frame between 2s and 5s
    stillgrab info input.mp4               # show the container's streams
    stillgrab schema                       # JSON schemas of the extract step
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from stillgrab.core.errors import StillgrabError
from stillgrab.core.logging import setup_logging

app = typer.Typer(name="stillgrab", help="Extract JPEG stills from a video time window")
console = Console()
err_console = Console(stderr=True)


@app.command()
def extract(
    input_file: Path = typer.Argument(..., help="Input video file"),
    start_time: int = typer.Argument(..., help="Window start in seconds"),
    end_time: int = typer.Argument(..., help="Window end in seconds"),
    n: int = typer.Argument(..., metavar="N", help="Save every Nth frame in the window"),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Where to write the JPEGs"),
    config: Path = typer.Option(None, "--config", "-c", help="Step config YAML"),
    pattern: str = typer.Option(None, "--pattern", help="Filename pattern, e.g. 'frame_{index:05d}.jpg'"),
    quality: int = typer.Option(None, "--quality", "-q", help="MJPEG qscale, 2 (best) to 31"),
    log_level: str = typer.Option("INFO", "--log-level", help="Python log level"),
    ffmpeg_log_level: str = typer.Option("quiet", "--ffmpeg-log-level", help="FFmpeg log level"),
) -> None:
    """Save every Nth frame between START and END seconds as JPEG files."""
    setup_logging(log_level)
    from stillgrab.core.config import load_step_config
    from stillgrab.core.media import media_runtime
    from stillgrab.steps.s01_extract_frames.config import ExtractFramesConfig
    from stillgrab.steps.s01_extract_frames.contracts import ExtractFramesInput
    from stillgrab.steps.s01_extract_frames.step import ExtractFramesStep

    try:
        step_config = load_step_config(
            config,
            ExtractFramesConfig,
            overrides={
                "stride": n,
                "output_dir": output_dir,
                "filename_pattern": pattern,
                "quality": quality,
            },
        )
        step = ExtractFramesStep(config=step_config, data_root=Path.cwd())
        step_input = ExtractFramesInput(video_path=input_file, start_time=start_time, end_time=end_time)
        with media_runtime(ffmpeg_log_level):
            output = step.execute(step_input)
    except (StillgrabError, ValueError) as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"Frames saved as JPEGs from {start_time} to {end_time} seconds.")
    console.print(
        f"[green]{len(output.frame_list)} file(s) written to {output.frames_dir} "
        f"({output.frames_processed} frames in window, every {step_config.stride})[/green]"
    )


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input video file"),
    ffmpeg_log_level: str = typer.Option("quiet", "--ffmpeg-log-level", help="FFmpeg log level"),
) -> None:
    """Show the streams of a media file."""
    setup_logging("WARNING")
    from stillgrab.core.media import media_runtime
    from stillgrab.steps.s01_extract_frames._demux import DemuxSource, select_video_stream

    try:
        with media_runtime(ffmpeg_log_level), DemuxSource.open(input_file) as source:
            streams = source.probe_streams()
            try:
                selected = select_video_stream(streams).index
            except StillgrabError:
                selected = None
    except (StillgrabError, ValueError) as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{input_file.name}")
    table.add_column("#", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Codec", style="green")
    table.add_column("Size")
    table.add_column("Format")
    table.add_column("Time base", style="dim")
    table.add_column("Seconds")
    table.add_column("Used", style="yellow")

    for s in streams:
        duration = s.duration_seconds
        table.add_row(
            str(s.index),
            s.media_type,
            s.codec_name or "?",
            f"{s.width}x{s.height}" if s.media_type == "video" else "-",
            s.pix_fmt or "-",
            str(s.time_base) if s.time_base is not None else "-",
            f"{duration:.2f}" if duration is not None else "-",
            "Y" if s.index == selected else "",
        )
    console.print(table)
    if selected is None:
        err_console.print("[red]No video stream found[/red]")
        raise typer.Exit(1)


@app.command()
def schema() -> None:
    """Print JSON schemas for the extract step's input, output and config."""
    from stillgrab.steps.s01_extract_frames.step import ExtractFramesStep

    schemas = {
        "input": ExtractFramesStep.get_input_schema(),
        "output": ExtractFramesStep.get_output_schema(),
        "config": ExtractFramesStep.get_config_schema(),
    }
    console.print_json(json.dumps(schemas))


if __name__ == "__main__":
    app()
