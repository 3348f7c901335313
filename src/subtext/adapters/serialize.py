"""Plain-data dumps of parsed documents for the CLI and the API."""

import io
import json
from typing import Any

import yaml

from ..core.model import Block, Document, Inline, Span
from ..render.semantic import RichText
from ..render.verbatim import AttributedText


def span_to_list(span: Span) -> list[int]:
    return [span.start, span.end]


def inline_to_dict(inline: Inline) -> dict[str, Any]:
    return {
        "kind": inline.kind,
        "text": inline.text,
        "span": span_to_list(inline.span),
    }


def block_to_dict(block: Block) -> dict[str, Any]:
    out: dict[str, Any] = {
        "kind": block.kind,
        "span": span_to_list(block.span),
        "body": block.body(),
    }
    if block.inline:
        out["inline"] = [inline_to_dict(i) for i in block.inline]
    return out


def document_to_dict(doc: Document) -> dict[str, Any]:
    return {
        "blocks": [block_to_dict(b) for b in doc.blocks],
        "links": [inline_to_dict(i) for i in doc.link_spans()],
    }


def attributed_to_dict(text: AttributedText) -> dict[str, Any]:
    return {
        "text": text.text,
        "attributes": [
            {"name": a.name, "span": span_to_list(a.span), "value": a.value}
            for a in text.attributes
        ],
    }


def rich_to_dict(rich: RichText) -> dict[str, Any]:
    return {
        "paragraphs": [
            {
                "kind": p.kind,
                "runs": [
                    {"text": r.text, "style": r.style, "link": r.link}
                    for r in p.runs
                ],
            }
            for p in rich.paragraphs
        ]
    }


def dump(data: Any, fmt: str = "json") -> str:
    """Encode plain data as ``json`` or ``yaml``."""
    if fmt == "yaml":
        buf = io.StringIO()
        yaml.safe_dump(data, buf, sort_keys=False, allow_unicode=True)
        return buf.getvalue()
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    raise ValueError(f"Unknown output format: {fmt}")
