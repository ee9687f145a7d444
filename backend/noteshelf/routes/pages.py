"""
NoteShelf Backend — Static Page Route
=======================================

What:  Serves the front-end files from settings.pages_dir.
How:   A catch-all GET registered after every other router. "/" maps to
       index.html; anything that does not resolve to a regular file inside
       the pages directory is a plain-text 404.
"""

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, PlainTextResponse, Response

from noteshelf.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])

INDEX_PAGE = "index.html"


def resolve_page(pages_root: Path, page_path: str):
    """
    Map a URL path to a file under ``pages_root``.

    Returns None for traversal attempts ("../", absolute paths), for paths
    the filesystem cannot represent (embedded NUL) and for anything that is
    not an existing regular file.
    """
    root = pages_root.resolve()
    try:
        target = (root / (page_path or INDEX_PAGE)).resolve()
        if not target.is_relative_to(root):
            logger.warning("Rejected page path outside pages directory: %s", page_path)
            return None
        if not target.is_file():
            return None
    except (ValueError, OSError) as e:
        logger.warning("Unusable page path %r: %s", page_path, str(e))
        return None
    return target


@router.get("/{page_path:path}", include_in_schema=False)
async def serve_page(page_path: str) -> Response:
    target = resolve_page(Path(settings.pages_dir), page_path)
    if target is None:
        return PlainTextResponse("Not found", status_code=404)
    return FileResponse(path=str(target))
