"""Runtime wiring helper for CLI and API applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.resolver import SlugLinkResolver
from .config import SubtextConfig, load_config
from .core.ports import LinkResolver, ParserStrategy
from .parser.blocks import SubtextParser


@dataclass
class Runtime:
    """Container for all wired components."""
    config: SubtextConfig
    parser: ParserStrategy
    resolver: LinkResolver


def build_runtime(
    config_path: Path | None = None,
    link_base: str | None = None,
) -> Runtime:
    """Build and wire all components."""
    config = load_config(config_path=config_path)

    # CLI args take precedence over config values
    if link_base is not None:
        config.render.link_base = link_base

    return Runtime(
        config=config,
        parser=SubtextParser(),
        resolver=SlugLinkResolver(config.render.link_base),
    )
