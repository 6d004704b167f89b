"""
Stage progress bar for the clustering pipeline.
"""
import threading
import time
from typing import Optional, Sequence

from colorama import Fore
from .utils import color_text


class ProgressBar:
    """
    Thread-safe console bar over a fixed list of named stages.

    Each update() marks the next stage as done and prints its name after the
    bar; finish() prints the elapsed time and ends the line.

    Args:
        stages: Names of the stages, in execution order
        label: Label to display before the progress bar
        width: Width of the progress bar in characters
    """
    def __init__(self, stages: Sequence[str], label: str = "Progress", width: int = 30):
        if not stages:
            raise ValueError("ProgressBar needs at least one stage")
        self.stages = list(stages)
        self.total = len(self.stages)
        self.label = label
        self.width = width
        self.current = 0
        self._started = time.perf_counter()
        self._lock = threading.Lock()

    @property
    def done(self) -> bool:
        return self.current >= self.total

    def _render(self, suffix: str) -> None:
        ratio = self.current / self.total
        filled = int(self.width * ratio)
        bar = "█" * filled + "-" * (self.width - filled)
        print(f"\r{color_text(f'{self.label}: [{bar}] {self.current}/{self.total}{suffix}', Fore.CYAN)}",
              end='',
              flush=True)

    def update(self) -> Optional[str]:
        """
        Mark the next stage as completed.

        Returns:
            Name of the completed stage, or None if every stage was already done.
        """
        with self._lock:
            if self.done:
                return None
            stage = self.stages[self.current]
            self.current += 1
            self._render(f" {stage}")
            return stage

    def finish(self) -> float:
        """
        Print the elapsed time and a newline.

        Returns:
            Seconds since the bar was created.
        """
        with self._lock:
            elapsed = time.perf_counter() - self._started
            self._render(f" done in {elapsed:.2f}s")
            print()
            return elapsed
