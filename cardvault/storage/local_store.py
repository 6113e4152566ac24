from pathlib import Path, PurePosixPath

from cardvault.storage.exceptions import StorageError

EXTENSIONS: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "application/pdf": "pdf",
    "audio/mpeg": "mp3",
    "application/json": "json",
}


def stored_file_path(root: Path, category: str, filename: str) -> Path:
    """Build path to a stored file: {root}/{category}/{filename}"""
    return root / category / filename


class LocalFileStore:
    """Writes pipeline artifacts (card images, audio, samples) under a public root.

    Returned references are public paths relative to the root, e.g.
    ``/cards/12345678.jpg``.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    def save(self, category: str, name: str, data: bytes, content_type: str) -> str:
        """Write ``data`` as ``{name}.{ext}`` and return its public reference.

        Raises:
            StorageError: for an unknown content type, an unsafe name, or an
                OS-level write failure.
        """
        extension = EXTENSIONS.get(content_type)
        if extension is None:
            raise StorageError(f"No file extension known for content type '{content_type}'")
        if not name or "/" in name or "\\" in name or name in {".", ".."}:
            raise StorageError(f"Unsafe file name '{name}'")
        filename = f"{name}.{extension}"
        path = stored_file_path(self._root, category, filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        return str(PurePosixPath("/", category, filename))
