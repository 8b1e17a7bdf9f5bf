from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from llama_chat.config import ConfigError, load_settings
from llama_chat.llm import build_llm
from llama_chat.session import ChatSession, prompt_overrides, read_lines
from llama_chat.utils.run_log import init_run_log, make_run_id


def main(argv: list[str] | None = None) -> int:
    # Best-effort fix for Windows terminals defaulting to a legacy code page.
    try:
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    except (AttributeError, ValueError):
        pass

    parser = argparse.ArgumentParser(prog="llama-chat", description="Chat with an Ollama-style model server.")
    parser.add_argument(
        "--no-log",
        action="store_true",
        help="do not write the run log even when LLAMA_CHAT_LOG_DIR is set",
    )
    args = parser.parse_args(argv)

    console = Console()
    try:
        settings = load_settings()
        llm = build_llm(settings)
    except ConfigError as e:
        console.print(f"[bold red]Error loading config:[/bold red] {escape(str(e))}")
        return 1

    settings = prompt_overrides(settings, console.input, console)

    run_log = None
    if settings.log_dir is not None and not args.no_log:
        run_log = init_run_log(settings.log_dir, make_run_id())

    session = ChatSession.from_settings(settings, llm, console=console, run_log=run_log)
    try:
        session.run(read_lines(console.input, f"{escape(settings.human_name)}: "))
    except KeyboardInterrupt:
        console.print()
    if run_log is not None:
        console.print(f"[dim]run_log: {run_log.jsonl_path}[/dim]")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
