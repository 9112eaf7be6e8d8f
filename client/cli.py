"""Command-line front end for the TTS proxy.

Commands:
- ``voices``: print the voice catalog.
- ``speak``: synthesise one text, play it and optionally save it.
- ``interactive``: a prompt loop that keeps one session alive, like the page.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from config.client import API_BASE_URL_ENV, DEFAULT_API_BASE_URL
from core.logging import setup_logging

from .api import ProxyClient
from .audio import launch_player, silent_player
from .session import ClientSession, GenerationBlockedError, NoAudioError
from .state import GenerationState

app = typer.Typer(
    name="tts-client",
    no_args_is_help=True,
    help="Speak text through the Watson TTS proxy.",
)
console = Console()

_API_URL_OPTION = typer.Option(
    DEFAULT_API_BASE_URL,
    "--api-url",
    envvar=API_BASE_URL_ENV,
    help="Base URL of the proxy API (ending in /api).",
)


def _error_banner(message: str) -> None:
    console.print(f"[bold white on red] {message} [/]")


def _render_voices(session: ClientSession) -> None:
    table = Table(title="Available voices")
    table.add_column("#", justify="right")
    table.add_column("Voice ID")
    table.add_column("Name")
    table.add_column("Language")
    table.add_column("Gender")
    for index, voice in enumerate(session.voices, start=1):
        marker = "*" if voice.voice_id == session.selected_voice_id else ""
        table.add_row(
            f"{index}{marker}", voice.voice_id, voice.name, voice.language, voice.gender
        )
    console.print(table)


async def _generate(session: ClientSession) -> bool:
    with console.status("Generating..."):
        state = await session.generate_speech()
    if state is GenerationState.FAILED:
        _error_banner(session.error or "Error generating speech")
        return False
    size = session.audio.size if session.audio is not None else 0
    console.print(f"[green]Speech ready[/] ({size} bytes)")
    return True


def _download(session: ClientSession, directory: Path) -> bool:
    try:
        target = session.download(directory)
    except NoAudioError as exc:
        _error_banner(exc.message)
        return False
    console.print(f"Saved to [bold]{target}[/]")
    return True


async def _run_voices(api_url: str) -> int:
    async with ProxyClient(api_url) as api:
        session = ClientSession(api)
        await session.load_voices()
        if session.error:
            _error_banner(session.error)
            return 1
        _render_voices(session)
        return 0


async def _run_speak(
    api_url: str,
    text: str,
    voice: Optional[str],
    download: Optional[Path],
    play: bool,
) -> int:
    async with ProxyClient(api_url) as api:
        session = ClientSession(api, player=launch_player if play else silent_player)
        try:
            await session.load_voices()
            if session.error:
                _error_banner(session.error)
            if voice:
                try:
                    session.select_voice(voice)
                except ValueError as exc:
                    _error_banner(str(exc))
                    return 1

            session.text = text
            try:
                generated = await _generate(session)
            except GenerationBlockedError as exc:
                _error_banner(str(exc))
                return 1

            exit_code = 0 if generated else 1
            if download is not None and not _download(session, download):
                exit_code = 1
            return exit_code
        finally:
            session.close()


async def _run_interactive(api_url: str, download_dir: Path, play: bool) -> int:
    async with ProxyClient(api_url) as api:
        session = ClientSession(api, player=launch_player if play else silent_player)
        try:
            await session.load_voices()
            if session.error:
                _error_banner(session.error)
            else:
                _render_voices(session)
            console.print(
                "Type text to speak. Commands: :voices, :voice <#|id>, :download, :quit"
            )
            while True:
                line = typer.prompt(">", default="", show_default=False).strip()
                if not line:
                    continue
                if line in (":quit", ":q"):
                    return 0
                if line == ":voices":
                    _render_voices(session)
                elif line.startswith(":voice "):
                    _select_from_prompt(session, line.split(maxsplit=1)[1])
                elif line == ":download":
                    _download(session, download_dir)
                else:
                    session.text = line
                    await _generate(session)
        finally:
            session.close()


def _select_from_prompt(session: ClientSession, choice: str) -> None:
    voice_id = choice
    if choice.isdigit() and 1 <= int(choice) <= len(session.voices):
        voice_id = session.voices[int(choice) - 1].voice_id
    try:
        session.select_voice(voice_id)
    except ValueError as exc:
        _error_banner(str(exc))
        return
    console.print(f"Selected voice [bold]{voice_id}[/]")


@app.command()
def voices(api_url: str = _API_URL_OPTION) -> None:
    """List the voices offered by the proxy."""

    raise typer.Exit(code=asyncio.run(_run_voices(api_url)))


@app.command()
def speak(
    text: str = typer.Argument(..., help="Text to synthesise"),
    voice: Optional[str] = typer.Option(None, "--voice", "-v", help="Voice ID; defaults to the first listed voice"),
    download: Optional[Path] = typer.Option(
        None, "--download", "-d", help="Directory to save generated_speech.mp3 into"
    ),
    play: bool = typer.Option(True, "--play/--no-play", help="Open the audio once generated"),
    api_url: str = _API_URL_OPTION,
) -> None:
    """Generate speech for TEXT."""

    raise typer.Exit(code=asyncio.run(_run_speak(api_url, text, voice, download, play)))


@app.command()
def interactive(
    download_dir: Path = typer.Option(Path("."), "--download-dir", help="Where :download saves audio"),
    play: bool = typer.Option(True, "--play/--no-play", help="Open the audio once generated"),
    api_url: str = _API_URL_OPTION,
) -> None:
    """Keep a session open and speak each line you type."""

    raise typer.Exit(code=asyncio.run(_run_interactive(api_url, download_dir, play)))


@app.callback()
def _configure(verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging")) -> None:
    setup_logging(force=True, level="DEBUG" if verbose else "WARNING", file_output=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
