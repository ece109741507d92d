"""
Decompression stage.

Streams a .gz dataset into a plain file next to the reports.
"""

import gzip
import logging
import os
import shutil

import config.settings as settings
from reviewstats.errors import DecompressionError

logger = logging.getLogger(__name__)


class Decompressor:
    """
    Extracts a gzip file into an output directory.

    The file is copied in chunks, so neither the compressed nor the
    decompressed content has to fit in memory.
    """

    def __init__(self, chunk_size: int = settings.DECOMPRESS_CHUNK_SIZE):
        self.chunk_size = chunk_size

    def extract(self, gz_path: str, output_dir: str) -> str:
        """
        Decompress gz_path into output_dir.

        Args:
            gz_path: Path to the .gz file
            output_dir: Existing directory for the extracted file

        Returns:
            Path to the extracted file (basename without ".gz")

        Raises:
            DecompressionError: input missing, not gzip, or output not writable
        """
        output_path = os.path.join(output_dir, self.output_name(gz_path))
        logger.info(f"Extracting {gz_path}...")

        try:
            with gzip.open(gz_path, "rb") as f_in, open(output_path, "wb") as f_out:
                shutil.copyfileobj(f_in, f_out, self.chunk_size)
        except (OSError, EOFError, gzip.BadGzipFile) as e:
            logger.error(f"Failed to extract {gz_path}: {e}")
            raise DecompressionError(f"Cannot extract {gz_path}: {e}") from e

        logger.info(f"File extracted to {output_path}")
        return output_path

    @staticmethod
    def output_name(gz_path: str) -> str:
        """Basename of gz_path with a trailing ".gz" removed."""
        name = os.path.basename(gz_path)
        if name.endswith(".gz"):
            name = name[:-len(".gz")]
        return name
