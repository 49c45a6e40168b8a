"""File-backed store for the single cache record."""

import json
import os
import tempfile
from pathlib import Path

from weatherbar.exceptions import StorageReadError
from weatherbar.exceptions import StorageWriteError
from weatherbar.models.cache_record import CacheRecord
from weatherbar.utils.logging_utils import EnhancedLoggerMixin


class CacheStore(EnhancedLoggerMixin):
    """Reads and writes one JSON record at a fixed path. No policy."""
    
    def __init__(self, path: str | Path):
        """Initialize store.
        
        Args:
            path: Location of the cache file
        """
        super().__init__()
        self.path = Path(path)
        self.set_log_context(service="cache_store", path=str(self.path))
    
    def load(self) -> CacheRecord:
        """Load the persisted record.
        
        A missing file and an empty file both give the zero-value record.
        
        Returns:
            CacheRecord: The stored record
            
        Raises:
            StorageReadError: If the file cannot be read or is not a valid record
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            self.debug("No cache file, starting from empty record")
            return CacheRecord.empty()
        except OSError as e:
            raise StorageReadError(f"read file failed: {e}", str(self.path)) from e
        
        if not raw.strip():
            self.debug("Cache file is empty, starting from empty record")
            return CacheRecord.empty()
        
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageReadError(f"unmarshal file data failed: {e}", str(self.path)) from e
        
        if not isinstance(data, dict):
            raise StorageReadError(
                f"unmarshal file data failed: expected object, got {type(data).__name__}",
                str(self.path)
            )
        
        try:
            record = CacheRecord.from_dict(data)
        except ValueError as e:
            raise StorageReadError(f"invalid cache record: {e}", str(self.path)) from e
        
        self.debug(
            "Loaded cache record",
            success_timestamp=record.success_timestamp,
            error_timestamp=record.error_timestamp
        )
        return record
    
    def save(self, record: CacheRecord) -> None:
        """Persist the record, replacing any previous content.
        
        The record is written to a temporary file next to the cache file
        and renamed over it, so readers see either the old or the new record.
        
        Raises:
            StorageWriteError: If the file cannot be written
        """
        content = json.dumps(record.to_dict(), ensure_ascii=False)
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(content)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StorageWriteError(f"write file failed: {e}", str(self.path)) from e
        self.debug("Saved cache record")
