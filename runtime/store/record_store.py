"""RecordStore: append-only JSON-array files, one per collection.

Expected layout (by convention, see configs/settings.py):

    data/contact1.json
    data/data.json
    data/dashboard.json

Each file holds a single JSON array of records:

    [
      {"eventPurpose": "Wedding", "guests": "50", ...},
      ...
    ]

This store provides a simple API:

    ensure_exists()        -> bool
    load()                 -> list of records
    append(record)         -> list of records (the new full sequence)
    filter_exact(records, criteria) -> list of records

Nothing is cached: every call re-reads the file, so the file is the single
source of truth across requests and restarts.
"""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from exceptions.exceptions import StoreIOError, StoreParseError
from ..models.record_models import Record


logger = logging.getLogger(__name__)


class RecordStore:
    """Read / append access to one collection file.

    Parameters
    ----------
    path:
        The JSON file backing this collection.
    name:
        Collection name used in log and error messages.
    serialize_appends:
        When True (the default), `append` holds a per-store lock around its
        read-modify-write sequence so that concurrent submissions handled by
        this process cannot overwrite each other. Processes sharing one file
        are not coordinated.
    """

    def __init__(
        self,
        path: str | Path,
        name: Optional[str] = None,
        serialize_appends: bool = True,
    ) -> None:
        self.path = Path(path)
        self.name = name or self.path.stem
        self._lock: Optional[threading.Lock] = (
            threading.Lock() if serialize_appends else None
        )
        self._initialized = False

    def __repr__(self) -> str:
        return f"RecordStore(name={self.name!r}, path={str(self.path)!r})"

    # ------------------------------------------------------------------
    # Bootstrap
    # ------------------------------------------------------------------

    def ensure_exists(self) -> bool:
        """Create the collection file as an empty array if it is missing.

        Returns True if the file was created.
        """
        created = False
        if not self.path.exists():
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._write(self.path, [])
            except OSError as e:
                raise StoreIOError(
                    f"Could not create {self.name} collection file: {self.path}",
                    path=self.path,
                    cause=e,
                ) from e
            logger.info("Created empty %s collection at %s", self.name, self.path)
            created = True
        self._initialized = True
        return created

    # ------------------------------------------------------------------
    # Read / append
    # ------------------------------------------------------------------

    def load(self) -> List[Record]:
        """Return every record in the collection, in insertion order.

        Raises
        ------
        StoreIOError
            If the file is missing or cannot be read.
        StoreParseError
            If the file does not contain a JSON array.
        """
        return self._parse(self._read_text(), allow_empty=False)

    def append(self, record: Record) -> List[Record]:
        """Append one record and rewrite the whole collection file.

        The new contents are written to a temporary file next to the
        collection and renamed over it, so a failed write leaves the
        previous contents in place.
        """
        if self._lock is None:
            return self._append(record)
        with self._lock:
            return self._append(record)

    def _append(self, record: Record) -> List[Record]:
        if not self.path.exists() and not self._initialized:
            # First use before ensure_exists(): start from an empty array.
            records: List[Record] = []
        else:
            records = self._parse(self._read_text(), allow_empty=True)

        records.append(record)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write(self.path, records)
        except (OSError, TypeError, ValueError) as e:
            raise StoreIOError(
                f"Could not write {self.name} collection file: {e}",
                path=self.path,
                cause=e,
            ) from e
        return records

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_text(self) -> str:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise StoreParseError(
                f"Invalid UTF-8 in {self.name} collection file {self.path}: {e}",
                path=self.path,
            ) from e
        except OSError as e:
            raise StoreIOError(
                f"Could not read {self.name} collection file: {e}",
                path=self.path,
                cause=e,
            ) from e

    def _parse(self, text: str, allow_empty: bool) -> List[Record]:
        if allow_empty and not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreParseError(
                f"Invalid JSON in {self.name} collection file {self.path}: {e}",
                path=self.path,
            ) from e
        if not isinstance(data, list):
            raise StoreParseError(
                f"Invalid {self.name} collection file format: expected array, "
                f"got {type(data).__name__}",
                path=self.path,
            )
        return data

    @staticmethod
    def _write(path: Path, records: List[Record]) -> None:
        """Serialize `records` to a sibling temp file and rename it over `path`."""
        payload = json.dumps(records, ensure_ascii=False, indent=2)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def _number_text(value: float) -> str:
    """Format a float like JavaScript's Number.prototype.toString."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    if -7 < exp < 0:
        # JS keeps fixed notation down to 1e-6.
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return f"{sign}0.{'0' * (-exp - 1)}{digits}"
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def _as_text(value: Any) -> str:
    """String form of a JSON value, matching how browsers stringify it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _number_text(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else _as_text(v) for v in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def filter_exact(
    records: Iterable[Record], criteria: Mapping[str, Any]
) -> List[Record]:
    """Keep the records matching every non-empty criterion, case-insensitively.

    A record matches `field -> expected` when it has `field` with a non-null
    value whose string form equals `expected`, ignoring case. Records that
    lack the field (or are not objects at all) never match.
    """
    result = list(records)
    for field, expected in criteria.items():
        if not expected:
            continue
        wanted = str(expected).lower()
        result = [
            record
            for record in result
            if isinstance(record, Mapping)
            and record.get(field) is not None
            and _as_text(record[field]).lower() == wanted
        ]
    return result
