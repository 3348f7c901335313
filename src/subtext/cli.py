"""CLI for subtext - parse and render Subtext notes."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.serialize import (
    attributed_to_dict,
    document_to_dict,
    dump,
    inline_to_dict,
    rich_to_dict,
)
from .core.model import Document
from .parser.headers import parse_envelope
from .render.plain import render_plain
from .render.semantic import render_semantic
from .render.verbatim import render_markup, render_verbatim
from .runtime import build_runtime

logger = logging.getLogger(__name__)


def _read_input(args: argparse.Namespace) -> str:
    """Read markup from the file argument, or stdin when it is absent or '-'."""
    path = getattr(args, "file", None)
    if path is None or str(path) == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _load_document(args: argparse.Namespace, rt: Any) -> Document:
    markup = _read_input(args)
    if getattr(args, "note", False):
        markup = parse_envelope(markup).body
    return rt.parser.parse(markup)


def cmd_parse(args: argparse.Namespace, rt: Any) -> int:
    """Dump the parsed block/inline structure."""
    doc = _load_document(args, rt)
    fmt = "json" if args.json else args.format
    print(dump(document_to_dict(doc), fmt), end="" if fmt == "yaml" else "\n")
    return 0


def cmd_render(args: argparse.Namespace, rt: Any) -> int:
    """Render a document in one of the output projections."""
    doc = _load_document(args, rt)
    mode = args.mode

    if mode == "markup":
        sys.stdout.write(render_markup(doc))
    elif mode == "plain":
        separator = args.separator
        if separator is None:
            separator = rt.config.render.block_separator
        print(render_plain(doc, separator))
    elif mode == "verbatim":
        print(dump(attributed_to_dict(render_verbatim(doc, rt.resolver.resolve))))
    elif mode == "semantic":
        print(dump(rich_to_dict(render_semantic(doc, rt.resolver.resolve))))
    elif mode == "html":
        print(render_semantic(doc, rt.resolver.resolve).to_html())
    else:
        print(f"Unknown render mode: {mode}", file=sys.stderr)
        return 1
    return 0


def cmd_links(args: argparse.Namespace, rt: Any) -> int:
    """List link-like spans in source order."""
    doc = _load_document(args, rt)
    links = doc.link_spans()

    if args.json:
        print(dump([inline_to_dict(link) for link in links]))
    else:
        for link in links:
            print(f"{link.kind}\t{link.text}")

    if not args.quiet:
        logger.info("Found %d links", len(links))
    return 0


def cmd_excerpt(args: argparse.Namespace, rt: Any) -> int:
    """Print the excerpt of a document."""
    doc = _load_document(args, rt)
    max_chars = args.max_chars
    if max_chars is None:
        max_chars = rt.config.excerpt.max_chars
    print(doc.excerpt(max_chars=max_chars, ellipsis=rt.config.excerpt.ellipsis))
    return 0


def cmd_title(args: argparse.Namespace, rt: Any) -> int:
    """Print the title derived from a document."""
    doc = _load_document(args, rt)
    print(doc.title())
    return 0


def cmd_headers(args: argparse.Namespace, rt: Any) -> int:
    """Print the header block of a note."""
    envelope = parse_envelope(_read_input(args))

    if args.json:
        print(json.dumps(envelope.headers.to_dict(), indent=2, ensure_ascii=False))
    else:
        for header in envelope.headers:
            print(f"{header.normalized_name}\t{header.value}")
    return 0


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install subtext[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    token_arg = getattr(args, 'token', 'auto')
    token = None

    if token_arg == 'auto':
        token = generate_token()
        print(f"Generated bearer token: {token}")
        print(f"Use in requests: Authorization: Bearer {token}")
    elif token_arg == 'none':
        print("Warning: Running without authentication. Only use in trusted environments.")
        token = None
    else:
        token = token_arg

    app = create_app(rt, token=token, enable_cors=getattr(args, 'cors', False))

    host = getattr(args, 'host', '127.0.0.1')
    port = getattr(args, 'port', 8765)

    print(f"Starting server on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
    return 0


def version_string() -> str:
    return (
        f"subtext {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def _add_input_arguments(parser: argparse.ArgumentParser, note: bool = True) -> None:
    parser.add_argument(
        "file", nargs="?", default=None, help="Input file (default: stdin)"
    )
    if note:
        parser.add_argument(
            "--note",
            action="store_true",
            help="Input starts with a 'Name: Value' header block; parse only the body",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subtext", description="Subtext markup CLI"
    )
    parser.add_argument(
        "--version", action="version", version=version_string()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/subtext.toml)",
    )
    parser.add_argument(
        "--link-base",
        default=None,
        help="URL prefix for resolved wikilinks and slashlinks (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # parse command
    parser_parse = subparsers.add_parser("parse", help="Dump the parsed document structure")
    _add_input_arguments(parser_parse)
    parser_parse.add_argument(
        "--format", choices=["json", "yaml"], default="json",
        help="Output format (default: json)"
    )

    # render command
    parser_render = subparsers.add_parser("render", help="Render a document")
    _add_input_arguments(parser_render)
    parser_render.add_argument(
        "--mode",
        choices=["markup", "plain", "verbatim", "semantic", "html"],
        default="plain",
        help="Output projection (default: plain)",
    )
    parser_render.add_argument(
        "--separator", default=None,
        help="Block separator for plain output (overrides config)"
    )

    # links command
    parser_links = subparsers.add_parser("links", help="List wikilinks, slashlinks and URLs")
    _add_input_arguments(parser_links)

    # excerpt command
    parser_excerpt = subparsers.add_parser("excerpt", help="Print the excerpt of a document")
    _add_input_arguments(parser_excerpt)
    parser_excerpt.add_argument(
        "--max-chars", type=int, default=None,
        help="Truncate at a word boundary (overrides config)"
    )

    # title command
    parser_title = subparsers.add_parser("title", help="Print a derived title")
    _add_input_arguments(parser_title)

    # headers command
    parser_headers = subparsers.add_parser("headers", help="Print the header block of a note")
    _add_input_arguments(parser_headers, note=False)

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser_serve.add_argument("--port", type=int, default=8765, help="Port (default: 8765)")
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token: 'auto' to generate, 'none' to disable, or a literal token"
    )
    parser_serve.add_argument("--cors", action="store_true", help="Enable CORS")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        rt = build_runtime(config_path=args.config, link_base=args.link_base)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    level = logging.DEBUG if args.verbose else rt.config.log.numeric_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    handlers = {
        "parse": cmd_parse,
        "render": cmd_render,
        "links": cmd_links,
        "excerpt": cmd_excerpt,
        "title": cmd_title,
        "headers": cmd_headers,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            logger.debug("Command %s failed", args.cmd, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
