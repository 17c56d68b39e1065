from __future__ import annotations

"""PDF outline source backed by PyMuPDF.

The bookmark list returned by ``Document.get_toc(simple=False)`` is flat:
``[level, title, page, dest]`` with 1-based levels and pages. It is folded
back into a tree with a level stack. Destinations keep PyMuPDF's link
dictionary as an opaque payload, with ``page`` normalised to a 0-based
index whenever it is known.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pymupdf

from outline_navigator.core.exceptions import DestinationResolutionError, OutlineFetchError
from outline_navigator.core.models import Emphasis, OutlineNode, ResolvedDestination
from outline_navigator.core.sources.interfaces import OutlineSource

logger = logging.getLogger(__name__)

__all__ = ["PdfOutlineSource"]


def _emphasis_from_dest(dest: Dict[str, Any]) -> Emphasis:
    color = dest.get("color")
    rgb: Optional[Tuple[int, int, int]] = None
    if color and len(color) == 3:
        try:
            rgb = tuple(round(float(c) * 255) for c in color)  # type: ignore[assignment]
        except (TypeError, ValueError):
            rgb = None
    return Emphasis(bold=bool(dest.get("bold")), italic=bool(dest.get("italic")), color=rgb)


def _point_tuple(value: Any) -> Optional[Tuple[float, float]]:
    if value is None:
        return None
    try:
        return float(value[0]), float(value[1])
    except (TypeError, IndexError, ValueError):
        return None


class PdfOutlineSource(OutlineSource):
    """Outline source for a PDF file on disk.

    The document is opened lazily by the first call, which therefore runs on
    a worker thread. Calls are serialised because PyMuPDF documents are not
    safe to share between threads.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._doc: Optional[pymupdf.Document] = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def display_name(self) -> str:
        return self.path.name

    # ------------------------------------------------------------------
    # OutlineSource API
    # ------------------------------------------------------------------
    def fetch_outline(self) -> Optional[List[OutlineNode]]:
        with self._lock:
            doc = self._open()
            try:
                toc = doc.get_toc(simple=False)
            except Exception as exc:
                raise OutlineFetchError("Could not read the outline", self.display_name, exc) from exc

        if not toc:
            logger.info("%s has no outline", self.display_name)
            return None
        roots = self._build_tree(toc)
        logger.info("Loaded %d outline entries from %s", len(toc), self.display_name)
        return roots

    def resolve_destination(self, destination: Any) -> ResolvedDestination:
        if not isinstance(destination, dict):
            raise DestinationResolutionError(
                f"Unsupported destination type: {type(destination).__name__}",
                destination, self.display_name,
            )
        with self._lock:
            doc = self._open_for_resolution(destination)
            page_index, point, zoom = self._locate(doc, destination)
            page_count = doc.page_count

        if page_index < 0 or page_index >= page_count:
            raise DestinationResolutionError(
                f"Page index {page_index} out of range (document has {page_count} pages)",
                destination, self.display_name,
            )
        return ResolvedDestination(page_index=page_index, point=point, zoom=zoom, raw=destination)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            if self._doc is not None:
                try:
                    self._doc.close()
                finally:
                    self._doc = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _open(self) -> pymupdf.Document:
        if self._closed:
            raise OutlineFetchError("Document has been closed", self.display_name)
        if self._doc is None:
            try:
                self._doc = pymupdf.open(str(self.path))
            except Exception as exc:
                raise OutlineFetchError(f"Could not open {self.path}", self.display_name, exc) from exc
            if not self._doc.is_pdf:
                self._doc.close()
                self._doc = None
                raise OutlineFetchError("Not a PDF document", self.display_name)
        return self._doc

    def _open_for_resolution(self, destination: Dict[str, Any]) -> pymupdf.Document:
        try:
            return self._open()
        except OutlineFetchError as exc:
            raise DestinationResolutionError(str(exc.args[0]), destination, self.display_name, exc) from exc

    @staticmethod
    def _build_tree(toc: List[list]) -> List[OutlineNode]:
        roots: List[OutlineNode] = []
        # (level, node) of the currently open ancestors
        stack: List[Tuple[int, OutlineNode]] = []
        for entry in toc:
            level, title, page = int(entry[0]), entry[1], int(entry[2])
            dest = dict(entry[3]) if len(entry) > 3 and isinstance(entry[3], dict) else {}

            # Heading-only bookmarks come back as LINK_NONE with page -1
            kind = dest.get("kind", pymupdf.LINK_NONE)
            named = dest.get("nameddest") or dest.get("name")
            destination: Optional[Dict[str, Any]] = None
            if page > 0 or named or kind != pymupdf.LINK_NONE:
                destination = dest
                if not isinstance(destination.get("page"), int) or destination["page"] < 0:
                    destination["page"] = page - 1 if page > 0 else -1

            node = OutlineNode(
                title=(title or "").strip(),
                destination=destination,
                emphasis=_emphasis_from_dest(dest),
            )

            while stack and stack[-1][0] >= level:
                stack.pop()
            if stack:
                stack[-1][1].children.append(node)
            else:
                roots.append(node)
            stack.append((level, node))
        return roots

    def _locate(self, doc: pymupdf.Document, destination: Dict[str, Any]
                ) -> Tuple[int, Optional[Tuple[float, float]], Optional[float]]:
        kind = destination.get("kind")
        zoom = destination.get("zoom") or None

        if kind == pymupdf.LINK_GOTO or (kind is None and isinstance(destination.get("page"), int)):
            page_index = destination.get("page", -1)
            if isinstance(page_index, int) and page_index >= 0:
                return page_index, _point_tuple(destination.get("to")), zoom

        if kind == pymupdf.LINK_NAMED or destination.get("nameddest") or destination.get("name"):
            name = destination.get("nameddest") or destination.get("name")
            try:
                names = doc.resolve_names()
            except Exception as exc:
                raise DestinationResolutionError(
                    "Could not read named destinations", destination, self.display_name, exc
                ) from exc
            target = names.get(name) if name else None
            if target is None:
                raise DestinationResolutionError(
                    f"Unknown named destination: {name!r}", destination, self.display_name
                )
            return int(target.get("page", -1)), _point_tuple(target.get("to")), target.get("zoom") or zoom

        if kind == pymupdf.LINK_URI or kind == pymupdf.LINK_GOTOR or kind == pymupdf.LINK_LAUNCH:
            raise DestinationResolutionError(
                "Destination points outside the document", destination, self.display_name
            )

        raise DestinationResolutionError("Destination has no target page", destination, self.display_name)
