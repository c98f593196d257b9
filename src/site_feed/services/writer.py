"""Atomic writer for build artifacts."""

import logging
import tempfile
from pathlib import Path
from typing import List


logger = logging.getLogger(__name__)


class OutputWriter:
    """Writes files into the output directory without leaving partial files behind."""

    def __init__(self, output_dir: Path) -> None:
        """
        Initialize the output writer.

        Args:
            output_dir: Directory artifacts are written to
        """
        self.output_dir = Path(output_dir)

    def target(self, relative_path: str) -> Path:
        """
        Resolve an artifact path inside the output directory.

        Raises:
            ValueError: If the path would escape the output directory
        """
        path = (self.output_dir / relative_path).resolve()
        if not path.is_relative_to(self.output_dir.resolve()):
            raise ValueError(f"Refusing to write outside {self.output_dir}: {relative_path}")
        return path

    def write_bytes(self, relative_path: str, content: bytes) -> Path:
        """
        Atomically write an artifact.

        Args:
            relative_path: Path relative to the output directory
            content: File contents

        Returns:
            Path of the written file

        Raises:
            ValueError: If the path would escape the output directory
            IOError: If writing fails
        """
        path = self.target(relative_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode='wb',
                dir=path.parent,
                delete=False,
                suffix='.tmp'
            ) as temp_file:
                temp_path = Path(temp_file.name)
                temp_file.write(content)
                temp_file.flush()

            # Atomic move to final location
            temp_path.replace(path)

        except OSError as e:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise IOError(f"Failed to write {path}: {e}") from e

        logger.info(f"Wrote {len(content)} bytes to {path}")
        return path

    def list_artifacts(self) -> List[Path]:
        """Files currently present in the output directory."""
        if not self.output_dir.exists():
            return []
        return sorted(path for path in self.output_dir.rglob("*") if path.is_file())
