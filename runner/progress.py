"""Framed, nested progress output for move and remove runs."""

import sys
import time
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

FRAME_WIDTH = 120

FRAME_HEADER = "┏━"
FRAME_BODY = "┃ "
FRAME_FOOTER = "┗━"
FRAME_LINE = "━"


def colorize(text: str, color_code: int) -> str:
    return f"\033[{color_code}m{text}\033[0m"


class ProgressLogger:
    """
    Writes human readable progress, one message per line.
    
    Nesting is explicit: every call takes the depth it is logging at, and
    ``frame`` hands back the depth to use for messages inside the frame.
    """
    
    def __init__(
        self,
        stream: Optional[TextIO] = None,
        color: bool = True,
        enabled: bool = True,
        width: int = FRAME_WIDTH,
    ):
        self._stream = stream
        self.color = color
        self.enabled = enabled
        self.width = width
    
    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout
    
    def log(self, message: str, depth: int = 0) -> None:
        if not self.enabled:
            return
        print(f"{FRAME_BODY * depth}{message}", file=self.stream)
    
    @contextmanager
    def frame(self, title: str, depth: int = 0) -> Iterator[int]:
        """
        Surround the messages logged inside the block with a titled frame.
        
        The footer shows how long the block took.
        
        Yields:
            Depth for messages inside the frame.
        """
        header = f"{FRAME_HEADER}({title})"
        self.log(self._fill(header), depth)
        started = time.monotonic()
        try:
            yield depth + 1
        finally:
            footer = f"{FRAME_FOOTER}({time.monotonic() - started:.3f}s)"
            self.log(self._fill(footer), depth)
    
    def _fill(self, text: str) -> str:
        return text + FRAME_LINE * max(self.width - len(text), 0)
    
    def red(self, text: object) -> str:
        return colorize(str(text), 31) if self.color else str(text)
    
    def green(self, text: object) -> str:
        return colorize(str(text), 32) if self.color else str(text)
    
    def yellow(self, text: object) -> str:
        return colorize(str(text), 33) if self.color else str(text)


def quiet() -> ProgressLogger:
    """A logger that discards everything."""
    return ProgressLogger(enabled=False)
