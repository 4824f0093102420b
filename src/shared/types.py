"""Common type definitions."""

from typing import Any, Dict, Union
from pathlib import Path

# Type alias for paths
PathLike = Union[str, Path]

# Raw invocation event: {"auth": ..., "data": {...}}
Event = Dict[str, Any]
