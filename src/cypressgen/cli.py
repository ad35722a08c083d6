"""
Command-line interface for cypressgen.

Commands:
    create    Render a page and write its page object, tests and index into a
              Cypress project
    generate  Render a page and print the generated sources to stdout
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import structlog
from dotenv import load_dotenv

from cypressgen import __version__
from cypressgen.config import AppConfig, Language, RenderMode
from cypressgen.exceptions import CypressGenError
from cypressgen.generator import Generator
from cypressgen.models import GenerationResult
from cypressgen.renderer import PageRenderer
from cypressgen.workspace import CypressWorkspace


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure structlog for CLI output."""
    import logging

    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level),
        stream=sys.stderr,
    )

    # Logs go to stderr so generated sources on stdout stay clean
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "url",
        help="URL of the page (must include http:// or https://)",
    )

    parser.add_argument(
        "-n", "--name",
        default=None,
        help="Page object name, overriding the inferred feature name",
    )

    parser.add_argument(
        "--instructions",
        default=None,
        help="Free-text guidance for generation (recorded, not yet interpreted)",
    )

    parser.add_argument(
        "--html",
        type=Path,
        default=None,
        help="Read page HTML from this file instead of rendering the URL",
    )

    parser.add_argument(
        "-l", "--language",
        choices=[lang.value for lang in Language],
        default=None,
        help="Output language (default: js)",
    )

    parser.add_argument(
        "--render-mode",
        choices=[mode.value for mode in RenderMode],
        default=None,
        dest="render_mode",
        help="browser renders with headless Chromium, http fetches raw HTML (default: browser)",
    )

    parser.add_argument(
        "-t", "--timeout",
        type=int,
        default=None,
        help="Navigation timeout in milliseconds (default: 30000)",
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="YAML configuration file",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="cypressgen",
        description="Generate Cypress page objects and test suites from live web pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cypressgen create https://example.com/login
  cypressgen create https://example.com/login --workspace ./web --name signin
  cypressgen generate https://example.com/search --language ts
  cypressgen generate https://example.com --render-mode http --timeout 10000

Environment:
  CYPRESSGEN_LANGUAGE, CYPRESSGEN_RENDER_MODE, CYPRESSGEN_TIMEOUT_MS and the
  other CYPRESSGEN_* variables are read from the environment or a .env file.
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"cypressgen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser(
        "create",
        help="Write the page object, tests and index into a Cypress project",
    )
    _add_common_arguments(create)
    create.add_argument(
        "-w", "--workspace",
        type=Path,
        default=None,
        help="Cypress project path (default: detected from the current directory)",
    )

    generate = subparsers.add_parser(
        "generate",
        help="Print the generated page object and tests",
    )
    _add_common_arguments(generate)

    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    """Build the configuration from --config, the environment and CLI flags."""
    return AppConfig.load(
        path=args.config,
        overrides={
            "generator": {"language": args.language},
            "render": {"mode": args.render_mode, "timeout_ms": args.timeout},
        },
    )


async def fetch_html(args: argparse.Namespace, config: AppConfig) -> str:
    if args.html is not None:
        try:
            return args.html.read_text(encoding="utf-8")
        except OSError as e:
            raise CypressGenError(f"Cannot read HTML file {args.html}: {e}") from e
    return await PageRenderer(config.render).render(args.url)


async def run_generate(args: argparse.Namespace) -> int:
    """
    Execute a generation command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger = structlog.get_logger(__name__)
    config = load_config(args)

    workspace = None
    if args.command == "create":
        workspace = (
            CypressWorkspace(args.workspace)
            if args.workspace is not None
            else CypressWorkspace.detect()
        )

    logger.info(
        "generation_starting",
        url=args.url,
        command=args.command,
        language=config.generator.language.value,
        render_mode=config.render.mode.value,
    )

    html = await fetch_html(args, config)
    result = Generator(config.generator).generate(
        html,
        args.url,
        page_object_name=args.name,
        instructions=args.instructions,
    )

    if workspace is None:
        print_sources(result)
        return 0

    workspace.ensure_structure()
    page_path = workspace.write_page_object(result)
    test_path = workspace.write_test_file(result)
    index_path = workspace.write_index_file(result.language)

    print(f"Created {result.class_name} from {result.source_url}")
    print(f"  Page object: {page_path}")
    print(f"  Test file:   {test_path}")
    print(f"  Index file:  {index_path}")
    print(f"  Elements:    {len(result.elements)}")
    return 0


def print_sources(result: GenerationResult) -> None:
    print(f"// ===== {result.page_file_name} =====")
    print(result.class_source)
    print(f"// ===== {result.test_file_name} =====")
    print(result.test_source)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, debug=args.debug)

    try:
        exit_code = asyncio.run(run_generate(args))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except CypressGenError as e:
        logger = structlog.get_logger(__name__)
        logger.error("generation_failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        if args.debug:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
