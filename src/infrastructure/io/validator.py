"""Pre-flight source size accounting."""

from typing import Optional, Sequence

from domain.exceptions import SourceUnavailable, SourceTooLarge
from domain.models import SourceRef
from domain.storage import IObjectStore
from shared.logging import get_logger

logger = get_logger(__name__)


class HeaderValidator:
    """
    Looks up every source with a HEAD request before any data moves.
    Implements IHeaderValidator protocol.

    Lookups run one at a time. Size limits are only enforced when configured.
    """

    def __init__(
        self,
        store: IObjectStore,
        max_file_bytes: Optional[int] = None,
        max_total_bytes: Optional[int] = None
    ):
        self._store = store
        self.max_file_bytes = max_file_bytes
        self.max_total_bytes = max_total_bytes
        self._logger = get_logger(__name__)

    def validate(self, sources: Sequence[SourceRef]) -> int:
        """
        Accumulate the expected total size of all sources.

        Args:
            sources: Parsed source references

        Returns:
            Sum of the reported object sizes

        Raises:
            SourceUnavailable: On the first failed lookup
            SourceTooLarge: If a configured limit is exceeded
        """
        self._logger.info(f"Validating {len(sources)} source headers")
        total = 0

        for source in sources:
            try:
                info = self._store.head(source.bucket, source.key)
            except Exception as e:
                self._logger.error(f"Header lookup failed for {source.full_key}")
                raise SourceUnavailable(f"Cannot access {source.full_key}: {e}") from e

            if self.max_file_bytes is not None and info.size > self.max_file_bytes:
                raise SourceTooLarge(
                    f"{source.full_key} is {info.size} bytes, limit is {self.max_file_bytes}"
                )

            total += info.size
            self._logger.debug(f"{source.full_key}: {info.size} bytes (running total {total})")

            if self.max_total_bytes is not None and total > self.max_total_bytes:
                raise SourceTooLarge(
                    f"Sources exceed {self.max_total_bytes} bytes (at {total} after {source.full_key})"
                )

        self._logger.info(f"Expected source size is {total} bytes")
        return total
