"""Avatar storage backend.

Uploads are keyed ``{user_id}/avatar.{ext}`` and overwrite any previous file
with the same key. The store never looks inside the bytes; it only enforces
an extension allow-list and a size cap.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Protocol

from tunein_stage.core.errors import ValidationError
from tunein_stage.core.settings import settings

ALLOWED_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})

logger = logging.getLogger(__name__)


def avatar_key(user_id: uuid.UUID, filename: str) -> str:
    """Return the storage key for ``filename`` uploaded by ``user_id``."""
    if "." not in filename:
        raise ValidationError("Avatar file name must have an extension")
    ext = filename.rsplit(".", 1)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"Unsupported avatar type. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )
    return f"{user_id}/avatar.{ext}"


class AvatarStore(Protocol):
    """Anything that can persist an avatar and hand back a public URL."""

    def upload(self, user_id: uuid.UUID, filename: str, data: bytes) -> str:
        ...


class LocalAvatarStore:
    """Writes avatars beneath a directory served at ``public_base_url``."""

    def __init__(self, root: str | Path, public_base_url: str, max_bytes: int) -> None:
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")
        self.max_bytes = max_bytes

    def public_url(self, key: str) -> str:
        """Return the URL under which ``key`` is served."""
        return f"{self.public_base_url}/{key}"

    def upload(self, user_id: uuid.UUID, filename: str, data: bytes) -> str:
        """Store ``data`` for ``user_id`` and return its public URL.

        Raises:
            ValidationError: If the file is empty, too large or of an unsupported type.
        """
        key = avatar_key(user_id, filename)
        if not data:
            raise ValidationError("Avatar file is empty")
        if len(data) > self.max_bytes:
            raise ValidationError(
                f"Avatar too large. Maximum size: {self.max_bytes // 1024 // 1024}MB"
            )

        path = self.root / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Stored avatar %s (%d bytes)", key, len(data))
        return self.public_url(key)


_avatar_store: LocalAvatarStore | None = None


def get_avatar_store() -> LocalAvatarStore:
    """Return the process-wide avatar store built from settings."""
    global _avatar_store
    if _avatar_store is None:
        _avatar_store = LocalAvatarStore(
            settings.avatar_upload_dir,
            settings.avatar_public_base_url,
            settings.avatar_max_bytes,
        )
    return _avatar_store
