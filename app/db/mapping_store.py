"""
Mapping Store

Loads and persists the complete short code -> URL mapping from a JSON file.

Key Features:
- Whole-file persistence: every save rewrites the full mapping
- Empty file bootstrap: a zero-length file reads as an empty mapping
- No auto-creation: the file must exist before it is read or written
- Serialized updates: load -> modify -> save runs under an asyncio.Lock
- Atomic saves: a temporary sibling file replaces the mapping file, so
  unlocked readers never see a half-written mapping

Blocking file I/O is pushed to a worker thread so a slow disk does not
stall other requests on the event loop.

Note: the lock serializes writers inside one process only. Several
processes sharing the same file can still lose updates.
"""

import asyncio
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from app.db.models import UrlMappingRecord
from app.core.exceptions import PersistenceError, MappingFileMissingError

logger = logging.getLogger(__name__)


class MappingStore:
    """
    File-backed store for the UrlMapping aggregate.

    The store never removes single entries. clear() truncates the file,
    discarding every mapping at once.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store.

        Args:
            path: Location of the JSON mapping file
        """
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def load(self) -> dict[str, str]:
        """
        Read the full mapping from the backing file.

        Returns:
            Mapping of short code to original URL (empty if the file is empty)

        Raises:
            MappingFileMissingError: If the file does not exist
            PersistenceError: If the file cannot be read or parsed
        """
        return await asyncio.to_thread(self._read)

    async def save(self, mapping: dict[str, str]) -> None:
        """
        Overwrite the backing file with the full mapping.

        Raises:
            MappingFileMissingError: If the file does not exist
            PersistenceError: If the mapping cannot be serialized or written
        """
        await asyncio.to_thread(self._write, mapping)

    async def clear(self) -> None:
        """Truncate the backing file, discarding all mappings."""
        async with self._lock:
            await asyncio.to_thread(self._truncate)
        logger.info(f"Cleared mapping file {self.path}")

    async def update(self, short_code: str, original_url: str) -> dict[str, str]:
        """
        Store one mapping with a full read-modify-write of the file.

        An existing entry for short_code is replaced.

        Returns:
            The mapping as it was written
        """
        async with self._lock:
            mapping = await self.load()
            previous = mapping.get(short_code)
            if previous is not None and previous != original_url:
                logger.warning(
                    f"Short code {short_code} now maps to {original_url}, "
                    f"replacing {previous}"
                )
            mapping[short_code] = original_url
            await self.save(mapping)
            return mapping

    async def ensure_exists(self) -> bool:
        """
        Create an empty backing file if there is none.

        Returns:
            True if the file was created, False if it already existed
        """
        def _create() -> bool:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.touch(exist_ok=False)
            except FileExistsError:
                return False
            except OSError as e:
                raise PersistenceError(
                    f"cannot create mapping file '{self.path}'", original_error=e
                )
            return True

        created = await asyncio.to_thread(_create)
        if created:
            logger.info(f"Created empty mapping file {self.path}")
        return created

    def _read(self) -> dict[str, str]:
        try:
            content = self.path.read_bytes()
        except FileNotFoundError as e:
            raise MappingFileMissingError(self.path, original_error=e)
        except OSError as e:
            raise PersistenceError(
                f"cannot read mapping file '{self.path}'", original_error=e
            )

        if not content.strip():
            return {}

        try:
            record = UrlMappingRecord.model_validate_json(content)
        except ValidationError as e:
            raise PersistenceError(
                f"cannot decode mapping file '{self.path}'", original_error=e
            )
        return record.mapping

    def _write(self, mapping: dict[str, str]) -> None:
        try:
            payload = UrlMappingRecord(mapping=mapping).model_dump_json(by_alias=True)
        except (ValidationError, ValueError) as e:
            raise PersistenceError("cannot encode mapping to JSON", original_error=e)

        if not self.path.is_file():
            raise MappingFileMissingError(self.path)

        # readers see either the old or the new file, never a truncated one
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.chmod(tmp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(
                f"cannot write mapping file '{self.path}'", original_error=e
            )

    def _truncate(self) -> None:
        if not self.path.is_file():
            raise MappingFileMissingError(self.path)
        try:
            self.path.write_bytes(b"")
        except OSError as e:
            raise PersistenceError(
                f"cannot truncate mapping file '{self.path}'", original_error=e
            )
