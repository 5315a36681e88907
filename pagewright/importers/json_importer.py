"""

JSON importer for content block documents.

Accepts either ``{"title": ..., "blocks": [...]}`` or a bare list of block
objects. Each block object has a ``type`` of ``heading``, ``paragraph``
(alias ``text``), ``code``, ``list``, ``table``, ``image`` or ``diagram``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..models.blocks import (
    CodeBlock,
    ContentBlock,
    Emphasis,
    Heading,
    ListBlock,
    MediaBlock,
    Paragraph,
    TableBlock,
)
from ..models.elements import ElementHandle

logger = logging.getLogger(__name__)

_URI_PREFIXES = ("data:", "blob:", "http://", "https://", "file:")


class JSONBlockImporter:
    """

    Build content blocks from JSON data.

    Relative image paths are resolved against the directory of ``json_path``
    (or ``base_dir`` when the data is passed in directly).
    """

    def __init__(
        self,
        json_data: Optional[Union[Dict[str, Any], List[Any]]] = None,
        json_path: Optional[Union[str, Path]] = None,
        base_dir: Optional[Union[str, Path]] = None,
    ):
        """

        Args:
            json_data: Parsed JSON document - takes precedence over json_path
            json_path: Path of a JSON file to load
            base_dir: Directory for relative image paths
        """
        if json_data is not None:
            data = json_data
        elif json_path:
            json_path = Path(json_path)
            with open(json_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if base_dir is None:
                base_dir = json_path.parent
        else:
            raise ValueError("Either json_data or json_path must be provided")

        self.base_dir = Path(base_dir) if base_dir is not None else None

        if isinstance(data, list):
            self.title = ""
            self.raw_blocks = data
        elif isinstance(data, dict):
            self.title = str(data.get("title") or "")
            self.raw_blocks = data.get("blocks", [])
            if not isinstance(self.raw_blocks, list):
                raise ValueError("'blocks' must be a list")
        else:
            raise ValueError(f"Unsupported JSON document root: {type(data).__name__}")

        self._builders: Dict[str, Callable[[Dict[str, Any]], ContentBlock]] = {
            "heading": self._heading,
            "paragraph": self._paragraph,
            "text": self._paragraph,
            "code": self._code,
            "list": self._list,
            "table": self._table,
            "image": self._image,
            "diagram": self._diagram,
        }

    def to_blocks(self) -> List[ContentBlock]:
        """
        Convert the raw block objects.

        Raises:
            ValueError: If a block is malformed or has an unknown type
        """
        blocks: List[ContentBlock] = []
        for index, raw in enumerate(self.raw_blocks):
            if not isinstance(raw, dict):
                raise ValueError(f"Block {index} is not an object")
            block_type = str(raw.get("type", "")).lower()
            builder = self._builders.get(block_type)
            if builder is None:
                raise ValueError(f"Block {index} has unknown type {raw.get('type')!r}")
            try:
                blocks.append(builder(raw))
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"Block {index} ({block_type}) is invalid: {exc}") from exc

        logger.debug(f"Imported {len(blocks)} block(s) from JSON")
        return blocks

    def _heading(self, raw: Dict[str, Any]) -> Heading:
        return Heading(level=int(raw.get("level", 1)), text=str(raw["text"]))

    def _paragraph(self, raw: Dict[str, Any]) -> Paragraph:
        return Paragraph(text=str(raw["text"]), emphasis=Emphasis(raw.get("emphasis", "normal")))

    def _code(self, raw: Dict[str, Any]) -> CodeBlock:
        if "lines" in raw:
            return CodeBlock(lines=tuple(str(line) for line in raw["lines"]))
        return CodeBlock.from_text(str(raw["text"]))

    def _list(self, raw: Dict[str, Any]) -> ListBlock:
        return ListBlock.from_items([str(item) for item in raw["items"]], ordered=bool(raw.get("ordered", False)))

    def _table(self, raw: Dict[str, Any]) -> TableBlock:
        return TableBlock.from_cells([[str(cell) for cell in row] for row in raw["rows"]])

    def _image(self, raw: Dict[str, Any]) -> MediaBlock:
        handle = ElementHandle(
            tag="img",
            src=self._resolve_src(raw.get("src")),
            alt=str(raw.get("alt", "")),
            declared_width=int(raw.get("width", 0)),
            declared_height=int(raw.get("height", 0)),
        )
        return MediaBlock.image(handle)

    def _diagram(self, raw: Dict[str, Any]) -> MediaBlock:
        diagram_type = str(raw.get("diagramType") or raw.get("diagram_type") or "")
        src = self._resolve_src(raw.get("src"))
        child = ElementHandle(tag="img", src=src) if src else ElementHandle(tag="svg")
        container = ElementHandle(
            tag="div",
            classes=[f"{diagram_type}-diagram"] if diagram_type else [],
            children=[child],
            source=str(raw.get("source", "")),
            offset_width=int(raw.get("width", 0)),
            offset_height=int(raw.get("height", 0)),
        )
        return MediaBlock.diagram(container)

    def _resolve_src(self, src: Optional[str]) -> Optional[str]:
        if not src:
            return None
        if src.startswith(_URI_PREFIXES) or self.base_dir is None:
            return src
        path = Path(src)
        if path.is_absolute():
            return src
        return str(self.base_dir / path)


def load_document(json_path: Union[str, Path]) -> Tuple[str, List[ContentBlock]]:
    """Read a JSON document and return ``(title, blocks)``."""
    importer = JSONBlockImporter(json_path=json_path)
    return importer.title, importer.to_blocks()
