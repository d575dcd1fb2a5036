"""Persistent output-to-workspace mapping and previous-workspace record.

Both files are small JSON documents rewritten wholesale on every save
(temp file + rename). There is no locking: one writer per file is assumed.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from pydantic import ValidationError

from ..errors import ErrorCode, PersistenceError
from ..models.mapping import MappingFile, PreviousWorkspace, normalize_numbers, parse_mapping_spec
from ..models.sway import Output

logger = logging.getLogger(__name__)


def atomic_write_json(path: Path, data: object) -> None:
    """Write JSON to ``path`` atomically.

    Raises:
        PersistenceError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}-", suffix=".tmp")
    except OSError as e:
        raise PersistenceError(ErrorCode.FILE_WRITE_ERROR, str(path), str(e)) from e

    try:
        with os.fdopen(fd, "w") as f:
            json.dump(data, f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except OSError as e:
        if Path(temp_path).exists():
            os.unlink(temp_path)
        raise PersistenceError(ErrorCode.FILE_WRITE_ERROR, str(path), str(e)) from e


def _read_json(path: Path) -> object:
    try:
        with path.open("r") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise PersistenceError(ErrorCode.FILE_NOT_FOUND, str(path), "file does not exist") from e
    except (OSError, json.JSONDecodeError) as e:
        raise PersistenceError(ErrorCode.FILE_READ_ERROR, str(path), str(e)) from e


class MappingStore:
    """Manager for the mapping file and the previous-workspace file.

    The in-memory ``mapping`` starts empty. ``load()`` replaces it with the
    file content; ``save()`` overwrites the file with it. Updates for an
    output always replace that output's entry, never merge.
    """

    def __init__(self, mapping_file: Path, previous_file: Path):
        """Initialize store.

        Args:
            mapping_file: Path to the mapping JSON object
            previous_file: Path to the previous-workspace JSON pair
        """
        self.mapping_file = mapping_file
        self.previous_file = previous_file
        self.mapping: Dict[str, List[int]] = {}

    # Mapping

    def load(self) -> Dict[str, List[int]]:
        """Load the mapping from disk, replacing the in-memory copy.

        Raises:
            PersistenceError: FILE_NOT_FOUND if missing, FILE_READ_ERROR if
                unreadable or invalid
        """
        data = _read_json(self.mapping_file)
        try:
            self.mapping = MappingFile.model_validate(data).root
        except ValidationError as e:
            raise PersistenceError(ErrorCode.FILE_READ_ERROR, str(self.mapping_file), str(e)) from e
        logger.debug(f"Loaded mapping for {len(self.mapping)} output(s) from {self.mapping_file}")
        return self.mapping

    def load_or_empty(self) -> Dict[str, List[int]]:
        """Like ``load()`` but a missing file yields an empty mapping."""
        try:
            return self.load()
        except PersistenceError as e:
            if e.code != ErrorCode.FILE_NOT_FOUND:
                raise
            logger.info(f"No mapping file at {self.mapping_file}, using empty mapping")
            self.mapping = {}
            return self.mapping

    def save(self) -> None:
        data = MappingFile(self.mapping).model_dump()
        atomic_write_json(self.mapping_file, data)
        logger.debug(f"Saved mapping for {len(data)} output(s) to {self.mapping_file}")

    def set_output(self, output: str, numbers: Iterable[int]) -> None:
        """Replace the entry for ``output``."""
        self.mapping[output] = normalize_numbers(numbers)

    def apply_specs(self, tokens: Sequence[str], outputs: Sequence[Output]) -> List[str]:
        """Apply OUTPUT:SPEC tokens against the connected outputs.

        Every token is parsed before anything changes, so a single bad token
        rejects the whole set. Tokens are then applied in order; an output
        named twice (by name or by descriptor) keeps the later set. Tokens for
        outputs that are not connected are skipped.

        Returns:
            Names of the outputs whose entry was replaced

        Raises:
            MappingSpecError: If any token is malformed
        """
        parsed = [parse_mapping_spec(token) for token in tokens]

        applied: List[str] = []
        for identifier, numbers in parsed:
            output = next((o for o in outputs if o.matches(identifier)), None)
            if output is None:
                logger.warning(f"Output '{identifier}' is not connected, ignoring its mapping")
                continue
            self.set_output(output.name, numbers)
            if output.name not in applied:
                applied.append(output.name)
        return applied

    def outputs_claiming(self, num: int) -> List[str]:
        """All outputs whose declared set contains ``num``, sorted by name."""
        return sorted(output for output, numbers in self.mapping.items() if num in numbers)

    # Previous workspace

    def record_previous(self, name: str, num: int) -> None:
        atomic_write_json(self.previous_file, PreviousWorkspace(name=name, num=num).to_pair())

    def load_previous(self) -> PreviousWorkspace:
        """Read the previous-workspace record.

        Raises:
            PersistenceError: If the file is missing or malformed
        """
        data = _read_json(self.previous_file)
        try:
            return PreviousWorkspace.model_validate(data)
        except ValidationError as e:
            raise PersistenceError(ErrorCode.FILE_READ_ERROR, str(self.previous_file), str(e)) from e
