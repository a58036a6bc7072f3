"""Well-known span tag keys."""

from __future__ import annotations

from typing import Final

ERROR: Final = "error"
SAMPLING_PRIORITY: Final = "sampling.priority"

# Priority that forces an errored span to be kept by samplers.
FORCE_KEEP_PRIORITY: Final = 1
