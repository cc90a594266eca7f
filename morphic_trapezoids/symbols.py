"""Self-generating symbol sequence and its subword statistics."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .config import SequenceConfig, get_sequence_config
from .errors import SequenceTooShortError
from .logging_utils import apply_debug_logging

logger = logging.getLogger(__name__)

MORPHISM: Tuple[Tuple[int, ...], ...] = (
    (0, 4, 9, 0, 8, 9, 0),
    (1, 5, 10, 1, 6, 10, 1),
    (2, 3, 11, 2, 7, 11, 2),
    (3, 2, 6, 3, 10, 6, 3),
    (4, 0, 7, 4, 11, 7, 4),
    (5, 1, 8, 5, 9, 8, 5),
    (6, 3, 2, 6, 3, 10, 6),
    (7, 4, 0, 7, 4, 11, 7),
    (8, 5, 1, 8, 5, 9, 8),
    (9, 0, 4, 9, 0, 8, 9),
    (10, 1, 5, 10, 1, 6, 10),
    (11, 2, 3, 11, 2, 7, 11),
)
NUM_SYMBOLS = len(MORPHISM)
IMAGE_LENGTH = len(MORPHISM[0])
# Symbol -> vector letter; the letters repeat with period three.
VECTOR_MAP = "ijkijkijkijk"


@dataclass(frozen=True)
class Interval:
    lo: int
    hi: int

    def __str__(self) -> str:
        return f"[{self.lo},{self.hi}]"


def generate_symbols(length: int) -> List[int]:
    """Expand the morphism until ``length`` symbols exist.

    Position 0 expands rule 0; every later position ``i`` expands the rule
    named by the symbol already stored at ``i``.
    """
    symbols: List[int] = []
    index = 0
    while len(symbols) < length:
        rule = 0 if index == 0 else symbols[index]
        symbols.extend(MORPHISM[rule][: length - len(symbols)])
        index += 1
    return symbols


def merge_new_windows(is_new: Sequence[bool], window_length: int) -> List[Interval]:
    """Group the start indices flagged as new into merged ``[i, i + window_length]`` spans.

    Index 0 always opens the first span; ``is_new[0]`` is ignored.
    """
    intervals: List[Interval] = []
    active = Interval(0, window_length)
    for i in range(1, len(is_new)):
        if not is_new[i]:
            continue
        if active.hi >= i:
            active = Interval(active.lo, i + window_length)
        else:
            intervals.append(active)
            active = Interval(i, i + window_length)
    intervals.append(active)
    return intervals


class SymbolSequence:
    """Prefix of the fixed point of :data:`MORPHISM`, grown on demand."""

    def __init__(self, length: int, config: Optional[SequenceConfig] = None) -> None:
        if length < 0:
            raise ValueError(f"Sequence length must be non-negative, got {length}")
        self.config = config or get_sequence_config()
        self._symbols: List[int] = generate_symbols(length)
        self._last_new: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._symbols)

    def __getitem__(self, index: int) -> int:
        return self._symbols[index]

    def extend(self, length: int) -> None:
        if len(self._symbols) >= length:
            return
        logger.debug("Extending symbol sequence from %d to %d", len(self._symbols), length)
        self._symbols = generate_symbols(length)

    def symbols(self, count: Optional[int] = None) -> Tuple[int, ...]:
        if count is None:
            return tuple(self._symbols)
        self.extend(count)
        return tuple(self._symbols[:count])

    def letters(self, count: Optional[int] = None) -> str:
        return "".join(chr(ord("a") + symbol) for symbol in self.symbols(count))

    def window(self, start: int, length: int) -> Tuple[int, ...]:
        return tuple(self._symbols[start : start + length])

    def vectors(self, start: int, length: int) -> str:
        return "".join(VECTOR_MAP[symbol] for symbol in self._symbols[start : start + length])

    def earliest_subword_match(self, start: int, length: int) -> int:
        """Smallest index whose ``length`` window equals the one at ``start``."""
        _check_length(length)
        if start < 0:
            raise ValueError(f"Start index must be non-negative, got {start}")
        self.extend(start + length + 1)
        target = self.window(start, length)
        for i in range(start + 1):
            if self.window(i, length) == target:
                return i
        return start

    def index_of_last_new_symbol(self) -> int:
        self.extend(self.config.base_scan_length)
        seen: Set[int] = set()
        for i, symbol in enumerate(self._symbols):
            seen.add(symbol)
            if len(seen) == NUM_SYMBOLS:
                return i
        raise SequenceTooShortError(
            f"Symbol sequence too short: not every symbol occurs in the first {len(self._symbols)}"
        )

    def index_of_last_new_symbol_pair(self) -> int:
        self.extend(self.config.base_scan_length)
        expected = {image[j : j + 2] for image in MORPHISM for j in range(IMAGE_LENGTH - 1)}
        for i in range(len(self._symbols) - 1):
            expected.discard(tuple(self._symbols[i : i + 2]))
            if not expected:
                return i
        raise SequenceTooShortError(
            f"Symbol sequence too short: {len(expected)} expected pairs missing "
            f"from the first {len(self._symbols)} symbols"
        )

    def index_of_last_new_subword(self, length: int) -> int:
        """Start index of the last window of ``length`` symbols that had not occurred before.

        Shorter lengths are solved first because each bound comes from the
        answer for ``ceil(length / 7) + 1``.
        """
        _check_length(length)
        pending = []
        current = length
        while current not in self._last_new:
            pending.append(current)
            if current <= 2:
                break
            current = _shorter_length(current)
        for word_length in reversed(pending):
            self._last_new[word_length] = self._scan_last_new(word_length)
        return self._last_new[length]

    def _scan_last_new(self, length: int) -> int:
        if length == 1:
            return self.index_of_last_new_symbol()
        if length == 2:
            return self.index_of_last_new_symbol_pair()
        shorter = _shorter_length(length)
        max_check = IMAGE_LENGTH * (self._last_new[shorter] + shorter)
        if max_check + length + 1 > len(self._symbols):
            self.extend(max_check + length + 2)
        logger.info("Scanning %d windows of length %d", max_check, length)

        symbols = self._symbols
        top = NUM_SYMBOLS ** (length - 1)
        word = 0
        for symbol in symbols[:length]:
            word = word * NUM_SYMBOLS + symbol
        seen = {word}
        last_new = 0
        interval = self.config.subword_progress_interval
        for j in range(length, max_check + length):
            if interval and (j - length) % interval == 0:
                logger.info("Considering index %d/%d", j - length, max_check)
            word = (word - top * symbols[j - length]) * NUM_SYMBOLS + symbols[j]
            if word not in seen:
                seen.add(word)
                last_new = j - length + 1
        return last_new

    def index_of_last_new_vector_sequence(self, length: int) -> int:
        """Start index of the last window of ``length`` symbols whose vector string had not occurred before.

        Every new vector string starts a new subword, so windows past the last
        new subword are not scanned.
        """
        upper = self.index_of_last_new_subword(length) + length
        self.extend(upper + length)
        seen: Set[str] = set()
        last_new = 0
        for i in range(upper):
            vectors = self.vectors(i, length)
            if vectors not in seen:
                seen.add(vectors)
                last_new = i
        return last_new

    def collinear_search_intervals(self, length: int) -> List[Interval]:
        """Spans covering every first occurrence of a ``length`` window."""
        upper = self.index_of_last_new_subword(length)
        self.extend(upper + length)
        packed = bytes(self._symbols)
        seen: Set[bytes] = set()
        flags = []
        for i in range(upper + 1):
            window = packed[i : i + length]
            flags.append(window not in seen)
            seen.add(window)
        return merge_new_windows(flags, length)


def _check_length(length: int) -> None:
    if length <= 0:
        raise ValueError(f"Word length must be positive, got {length}")


def _shorter_length(length: int) -> int:
    return math.ceil(length / IMAGE_LENGTH) + 1


apply_debug_logging(globals(), logger=logger, skip={"generate_symbols", "merge_new_windows", "SymbolSequence.window"})
