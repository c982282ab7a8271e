#!/usr/bin/env python3
"""
MCP Chat Client

This application connects to one or more MCP tool servers given on the
command line and answers terminal queries with a hosted language model that
can call the servers' tools.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from toolchat.cli.helper_functions import configure_logging
from toolchat.config import Settings, get_settings
from toolchat.llm.base_client import BaseLLMClient
from toolchat.llm.llm_client import LLMClient
from toolchat.orchestrator.errors import ConfigError, ServerConnectionError
from toolchat.orchestrator.main import QueryOrchestrator
from toolchat.orchestrator.registry import ToolRegistry
from toolchat.orchestrator.server_pool import ServerPool

logger = logging.getLogger(__name__)

# Typed alone on a line (any case) to leave the shell
EXIT_SENTINEL = "quit"

# Initialize Rich console for prettier output
console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toolchat",
        description="Chat with a language model that can call tools on MCP servers",
        usage="%(prog)s <path-to-server-script-1> [<path-to-server-script-2> ...]",
    )
    parser.add_argument(
        "servers",
        nargs="*",
        metavar="path",
        help="Tool server script to launch (.py or .js)",
    )
    return parser


def is_exit_command(line: str) -> bool:
    return line.lower() == EXIT_SENTINEL


async def run_interactive_mode(
    orchestrator: QueryOrchestrator, server_count: int, console: Any = console
) -> None:
    """
    Run the client in interactive mode, prompting the user for queries.

    Every line other than the exit sentinel is passed whole to the
    orchestrator. End of input also ends the session.

    Args:
        orchestrator: The query orchestrator instance
        server_count: Number of connected servers, shown in the banner
        console: Console used for prompts and output
    """
    console.print("\n[bold blue]MCP Client Started![/bold blue]")
    console.print(f"Connected to {server_count} MCP servers")
    console.print("Type your queries or 'quit' to exit.")

    while True:
        console.print("[cyan]Query[/cyan]")
        try:
            message = console.input("\n------ ")
        except EOFError:
            break

        if is_exit_command(message):
            break

        response = await orchestrator.process_query(message)

        # Display the response as plain text, answers carry literal brackets
        console.print(Panel(Text(response), title="Response", title_align="left"))


async def run_client(
    paths: Sequence[str],
    settings: Settings,
    llm_client: BaseLLMClient,
    console: Any = console,
) -> int:
    """
    Connect to the servers, run the shell and always close every connection.

    Returns:
        Process exit code
    """
    async with ServerPool(env=settings.server_env()) as pool:
        try:
            tools = await pool.connect(paths)
        except ServerConnectionError as e:
            logger.error(f"Failed to start MCP client: {str(e)}")
            return 1

        registry = ToolRegistry.from_descriptors(tools)
        orchestrator = QueryOrchestrator(llm_client, registry, pool)

        try:
            await run_interactive_mode(orchestrator, len(pool), console)
        except Exception as e:
            logger.error(f"Failed to process query: {str(e)}")
            return 1

    return 0


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the MCP chat client."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ConfigError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        return 1

    if not args.servers:
        parser.print_usage()
        return 0

    configure_logging(settings.log_level, settings.log_file)

    try:
        llm_client = LLMClient.create(
            provider=settings.llm_provider,
            model=settings.model,
            api_key=settings.anthropic_api_key,
            max_tokens=settings.max_tokens,
        )
    except ConfigError as e:
        console.print(f"[bold red]Error initializing LLM client:[/bold red] {str(e)}")
        return 1

    return await run_client(args.servers, settings, llm_client, console)


def run() -> None:
    try:
        exit_code = asyncio.run(main())
        sys.exit(exit_code)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    run()
