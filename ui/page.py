"""Static landing page served at the root path."""

from functools import lru_cache
from pathlib import Path

INDEX_FILE = Path(__file__).parent / "index.html"
INDEX_MEDIA_TYPE = "text/html;charset=UTF-8"


@lru_cache(maxsize=1)
def load_index_page() -> bytes:
    return INDEX_FILE.read_bytes()
