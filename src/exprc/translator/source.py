"""
Lookahead Source
================

Delivers the input to the recognizer one character at a time.

The source holds exactly one unconsumed character, ``look``. Advancing
reads the next character from the underlying stream; nothing beyond that
single character is ever buffered. When the stream is exhausted ``look``
becomes the END sentinel (the empty string) and stays there.

Example
-------
>>> from exprc.translator.source import LookaheadSource, END
>>> src = LookaheadSource.from_string("2+3")
>>> src.look
'2'
>>> src.advance()
>>> src.look
'+'
"""

import io
import logging
from typing import TextIO

logger = logging.getLogger(__name__)

# Sentinel held in ``look`` once the input is exhausted
END = ""


class LookaheadSource:
    """
    Single-character lookahead over a text stream.

    The first character is read on construction, so ``look`` is valid
    before any parsing begins.

    Attributes:
        look: The next unconsumed character, or END
        consumed: Number of characters advanced past so far
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self.look: str = END
        self.consumed = 0
        self._exhausted = False
        self._fetch()

    @classmethod
    def from_string(cls, text: str) -> "LookaheadSource":
        """Create a source reading from an in-memory string."""
        return cls(io.StringIO(text))

    @property
    def at_end(self) -> bool:
        """True once every input character has been consumed."""
        return self.look == END

    def advance(self) -> None:
        """
        Consume the current lookahead character and fetch the next one.

        Advancing at end of input is a no-op.
        """
        if self.at_end:
            return
        self.consumed += 1
        self._fetch()

    def _fetch(self) -> None:
        """Read one character from the stream into ``look``."""
        if self._exhausted:
            self.look = END
            return
        char = self._stream.read(1)
        if char == "":
            self._exhausted = True
            logger.debug(f"End of input after {self.consumed} characters")
        self.look = char
