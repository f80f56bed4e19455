# src/mender/app.py

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rich.logging import RichHandler

from mender.agents.repair_team.fixer_agent import CodeFixerAgent
from mender.agents.sre_team.sandbox import ExecutionProbe
from mender.cli.ascii import show_banner
from mender.cli.controller import canvas
from mender.config.config import RepairSettings, load_config
from mender.errors import ConfigError
from mender.llm_providers import initialize_groq_provider
from mender.workflow.repair_cycle import RepairLoopController, RepairStatus

EXIT_CODES = {
    RepairStatus.SUCCESS: 0,
    RepairStatus.EXHAUSTED: 1,
    RepairStatus.FATAL: 2,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mender",
        description="Run a program and let an LLM patch it until it stops crashing.",
    )
    parser.add_argument("target", help="Path of the program to run and repair")
    parser.add_argument("intent", nargs="*", help="Optional description of what the program should do")
    return parser


def configure_logging():
    level = logging.INFO if os.getenv("MENDER_DEBUG") else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=canvas.console, show_path=False)],
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the mender CLI. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    load_dotenv()
    configure_logging()
    show_banner(canvas)

    target = Path(args.target)
    if not target.is_file():
        canvas.error(f"Target program not found: {target}")
        return EXIT_CODES[RepairStatus.FATAL]

    try:
        config = load_config()
        settings = RepairSettings.from_config(config)
        model = initialize_groq_provider(config)
    except ConfigError as e:
        canvas.error(str(e))
        return EXIT_CODES[RepairStatus.FATAL]

    intent = " ".join(args.intent) or None
    controller = RepairLoopController(
        probe=ExecutionProbe(settings.profiles),
        patch_source=CodeFixerAgent(model=model),
        settings=settings,
        canvas=canvas,
    )

    try:
        outcome = controller.run(target, intent)
    except KeyboardInterrupt:
        canvas.warning("Interrupted.")
        return 130
    return EXIT_CODES[outcome.status]


def run():
    sys.exit(main())
