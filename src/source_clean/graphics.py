"""Null graphics sink for silent runs.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import logging
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

NULL_BACKEND = "Agg"


@contextmanager
def null_graphics() -> Iterator[None]:
    """Send matplotlib output to the non-interactive Agg backend.

    Figures opened inside the block are closed on exit and the previous
    backend is restored, whether or not the block raised.
    """
    import matplotlib
    import matplotlib.pyplot as plt

    previous = matplotlib.get_backend()
    switched = previous.lower() != NULL_BACKEND.lower()
    if switched:
        logger.debug(f"Switching matplotlib backend {previous} -> {NULL_BACKEND}")
        plt.switch_backend(NULL_BACKEND)
    existing = set(plt.get_fignums())
    try:
        yield
    finally:
        for num in set(plt.get_fignums()) - existing:
            plt.close(num)
        if switched:
            plt.switch_backend(previous)
