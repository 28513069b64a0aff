from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from . import transform
from .codec import decode_document, encode_document
from .config import PersistenceConfig
from .document import Document
from .errors import CorruptSaveError, SaveError, SaveIOError
from .fs import atomic_copy, atomic_write_bytes
from .paths import default_save_root, validate_profile_id

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    RECOVERED_FROM_BACKUP = "RECOVERED_FROM_BACKUP"


@dataclass
class LoadResult:
    status: LoadStatus
    document: Optional[Document] = None
    path: Optional[Path] = None

    @property
    def found(self) -> bool:
        return self.status is not LoadStatus.NOT_FOUND

    @property
    def recovered(self) -> bool:
        return self.status is LoadStatus.RECOVERED_FROM_BACKUP


class FileStore:
    """Reads and writes one document per profile with a single backup generation.

    File structure:
      <root>/<data_directory_name>/<profile_id>/<primary_file_name>
      <root>/<data_directory_name>/<profile_id>/<backup_file_name>

    Saves are verified by re-reading the written primary before the backup
    is refreshed, so the backup is always the last copy known to load.
    """

    def __init__(self, root_dir: Optional[Path] = None, config: Optional[PersistenceConfig] = None) -> None:
        self.config = config or PersistenceConfig()
        self.root_dir = Path(root_dir) if root_dir is not None else default_save_root()
        self.data_dir = self.root_dir / self.config.data_directory_name

    # Paths

    def profile_dir(self, profile_id: str) -> Path:
        return self.data_dir / validate_profile_id(profile_id)

    def primary_path(self, profile_id: str) -> Path:
        return self.profile_dir(profile_id) / self.config.primary_file_name

    def backup_path(self, profile_id: str) -> Path:
        return self.profile_dir(profile_id) / self.config.backup_file_name

    # Public API

    def exists(self, profile_id: str) -> bool:
        return self.primary_path(profile_id).exists()

    def list_profiles(self) -> List[str]:
        if not self.data_dir.is_dir():
            return []
        return sorted(
            p.name for p in self.data_dir.iterdir() if (p / self.config.primary_file_name).is_file()
        )

    def save(self, profile_id: str, document: Document) -> Path:
        """Write, verify and back up ``document`` for ``profile_id``.

        Raises:
            SaveIOError if the primary cannot be written or the backup refreshed.
            CorruptSaveError if the written primary does not load back.
        """
        primary = self.primary_path(profile_id)
        backup = self.backup_path(profile_id)
        payload = self._encode(encode_document(document))

        try:
            atomic_write_bytes(primary, payload)
        except OSError as exc:
            logger.error("Failed to write save %s: %s", primary, exc)
            raise SaveIOError(f"Unable to write save {primary}: {exc}") from exc

        try:
            self._read_document(primary)
        except SaveError as exc:
            logger.error("Verification of %s failed: %s", primary, exc)
            raise CorruptSaveError(f"Save verification failed for {primary}: {exc}") from exc

        try:
            atomic_copy(primary, backup)
        except OSError as exc:
            logger.error("Failed to refresh backup %s: %s", backup, exc)
            raise SaveIOError(f"Unable to write backup {backup}: {exc}") from exc

        logger.info("Saved profile '%s' to %s", profile_id, primary)
        return primary

    def load(self, profile_id: str) -> LoadResult:
        """Load the document for ``profile_id``, falling back to the backup.

        Returns a LoadResult whose status is NOT_FOUND when no primary exists.

        Raises:
            CorruptSaveError if neither primary nor backup can be decoded.
        """
        primary = self.primary_path(profile_id)
        backup = self.backup_path(profile_id)
        if not primary.exists():
            logger.info("No save found for profile '%s' at %s", profile_id, primary)
            return LoadResult(status=LoadStatus.NOT_FOUND)

        try:
            document = self._read_document(primary)
        except SaveError as primary_exc:
            if not backup.exists():
                logger.error("Primary save %s unreadable and no backup exists", primary)
                raise CorruptSaveError(f"Unable to load save from {primary}: {primary_exc}") from primary_exc
            try:
                document = self._read_document(backup)
            except SaveError as backup_exc:
                logger.error("Primary %s and backup %s are both unreadable", primary, backup)
                raise CorruptSaveError(
                    f"Unable to load save from {primary} ({primary_exc}) or backup ({backup_exc})"
                ) from backup_exc
            logger.warning(
                "Primary save %s is corrupt (%s); recovered profile '%s' from backup",
                primary,
                primary_exc,
                profile_id,
            )
            return LoadResult(status=LoadStatus.RECOVERED_FROM_BACKUP, document=document, path=backup)

        logger.info("Loaded profile '%s' from %s", profile_id, primary)
        return LoadResult(status=LoadStatus.OK, document=document, path=primary)

    def delete(self, profile_id: str) -> bool:
        """Remove a profile's primary and backup. Returns True if anything was removed."""
        profile_dir = self.profile_dir(profile_id)
        if not profile_dir.exists():
            return False
        try:
            shutil.rmtree(profile_dir)
        except OSError as exc:
            raise SaveIOError(f"Unable to delete profile {profile_dir}: {exc}") from exc
        logger.info("Deleted profile '%s'", profile_id)
        return True

    # Internal utilities

    def _encode(self, raw: bytes) -> bytes:
        if self.config.encryption_enabled:
            return transform.encode(raw, self.config.encryption_key)
        return raw

    def _decode(self, raw: bytes) -> bytes:
        if self.config.encryption_enabled:
            return transform.decode(raw, self.config.encryption_key)
        return raw

    def read_bytes(self, path: Path) -> bytes:
        """Read a save file and undo the obfuscation transform."""
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise SaveIOError(f"Unable to read {path}: {exc}") from exc
        return self._decode(raw)

    def _read_document(self, path: Path) -> Document:
        logger.debug("Reading document from %s", path)
        return decode_document(self.read_bytes(path))


__all__ = ["FileStore", "LoadResult", "LoadStatus"]
