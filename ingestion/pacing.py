"""Fixed pacing between sequential API calls."""

import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class PacingPolicy:
    """
    Fixed delays inserted between listing pages and between per-market calls.

    The delays are politeness spacing, not backoff: they never change in
    response to errors. Pass a different sleep to run without real timers.
    """

    page_delay: float = 0.1
    item_delay: float = 0.05
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def after_page(self) -> None:
        """Wait before requesting the next listing page."""
        if self.page_delay > 0:
            self.sleep(self.page_delay)

    def after_item(self) -> None:
        """Wait before the next per-market call."""
        if self.item_delay > 0:
            self.sleep(self.item_delay)


NO_PACING = PacingPolicy(page_delay=0, item_delay=0)
