"""
Decoder for LZ-String ``compressToBase64`` payloads.

BPJS web services compress the (decrypted) ``response`` field with the
JavaScript lz-string library before Base64 transport.  This module
reproduces the library's decode side exactly:

* every input character is mapped through a fixed 65 symbol table and
  contributes six bits, most significant first;
* codes are assembled least significant bit first with a width that
  starts at three bits and grows as the dictionary fills up;
* codes 0 and 1 introduce 8 and 16-bit literals, code 2 ends the stream
  and everything from 3 upwards is a dictionary phrase.

Only the decoder lives here.  ``decompress`` is the entry point; the
cursor and ``DictionaryDecoder`` are exposed so the bit level behaviour
can be exercised on its own.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import DecompressionError, MalformedStreamError, OutputLimitExceeded

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/="
_ALPHABET_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}

# six significant bits per symbol
RESET_MASK = 32

LITERAL_8 = 0
LITERAL_16 = 1
END_OF_STREAM = 2
FIRST_PHRASE = 3

_SURROGATE = re.compile('[\ud800-\udfff]')


def alphabet_index(char: str) -> int:
    """Position of ``char`` in the alphabet, ``-1`` if it is not part of it."""
    return _ALPHABET_INDEX.get(char, -1)


class BitCursor:
    """Read position inside a compressed string.

    ``current_word`` is the alphabet value being consumed and
    ``position_mask`` the bit that comes next.  The following symbol is
    fetched as soon as the last bit of the current one has been taken.
    """

    def __init__(self, symbols: str):
        self.symbols = symbols
        self.word_index = 0
        self.position_mask = RESET_MASK
        self.current_word: Optional[int] = None
        self._fetch()

    @property
    def exhausted(self) -> bool:
        return self.current_word is None

    def _fetch(self) -> None:
        if self.word_index >= len(self.symbols):
            self.current_word = None
            return
        char = self.symbols[self.word_index]
        value = alphabet_index(char)
        if value < 0:
            raise ValueError(f"invalid symbol {char!r} at offset {self.word_index}")
        self.current_word = value
        self.word_index += 1

    def next_bit(self) -> int:
        if self.current_word is None:
            raise MalformedStreamError(f"stream exhausted after {len(self.symbols)} symbols")
        bit = 1 if self.current_word & self.position_mask else 0
        self.position_mask >>= 1
        if self.position_mask == 0:
            self.position_mask = RESET_MASK
            self._fetch()
        return bit


def read_bits(cursor: BitCursor, width: int) -> int:
    """Read a ``width`` bit integer, least significant bit first."""
    result = 0
    power = 1
    for _ in range(width):
        result |= cursor.next_bit() * power
        power <<= 1
    return result


@dataclass
class DecoderState:
    dict_size: int = 4
    num_bits: int = 3
    enlarge_in: int = 4
    previous_phrase: str = ''


class DictionaryDecoder:
    """Step-wise LZ-String dictionary decoder.

    Call ``start()`` once to consume the header literal, then ``step()``
    until it returns False (or simply ``run()``).  Truncated streams and
    codes beyond the dictionary raise ``MalformedStreamError``; exceeding
    ``max_output`` raises ``OutputLimitExceeded``.
    """

    def __init__(self, cursor: BitCursor, max_output: Optional[int] = None):
        self.cursor = cursor
        self.max_output = max_output
        # 0, 1 and 2 are sentinels, never looked up as phrases
        self.dictionary: List[str] = ['\x00', '\x01', '\x02']
        self.state = DecoderState()
        self.output: List[str] = []
        self.output_size = 0

    def _emit(self, text: str) -> None:
        self.output_size += len(text)
        if self.max_output is not None and self.output_size > self.max_output:
            raise OutputLimitExceeded(self.max_output)
        self.output.append(text)

    def _add_phrase(self, phrase: str) -> None:
        self.dictionary.append(phrase)
        self.state.dict_size += 1
        self.state.enlarge_in -= 1

    def _grow_if_due(self) -> None:
        state = self.state
        if state.enlarge_in == 0:
            state.enlarge_in = 1 << state.num_bits
            state.num_bits += 1

    def _read_literal(self, code: int) -> str:
        width = 8 if code == LITERAL_8 else 16
        return chr(read_bits(self.cursor, width))

    def start(self) -> bool:
        """Consume the header literal.  False means an empty stream."""
        header = read_bits(self.cursor, 2)
        if header not in (LITERAL_8, LITERAL_16):
            return False
        char = self._read_literal(header)
        # becomes code 3; the initial state already accounts for it
        self.dictionary.append(char)
        self.state.previous_phrase = char
        self._emit(char)
        return True

    def step(self) -> bool:
        """Decode one code.  Returns False once the end marker is read."""
        state = self.state
        code = read_bits(self.cursor, state.num_bits)
        if code == END_OF_STREAM:
            return False
        if code in (LITERAL_8, LITERAL_16):
            char = self._read_literal(code)
            code = state.dict_size
            self._add_phrase(char)
            self._grow_if_due()

        previous = state.previous_phrase
        if FIRST_PHRASE <= code < state.dict_size:
            entry = self.dictionary[code]
        elif code == state.dict_size:
            entry = previous + previous[0]
        else:
            raise MalformedStreamError(f"code {code} beyond dictionary size {state.dict_size}")

        self._emit(entry)
        self._add_phrase(previous + entry[0])
        state.previous_phrase = entry
        self._grow_if_due()
        return True

    def result(self) -> str:
        return _join_surrogates(''.join(self.output))

    def run(self) -> str:
        if not self.start():
            return ''
        while self.step():
            pass
        return self.result()


def _join_surrogates(text: str) -> str:
    # lz-string works on UTF-16 code units; pair them back into code points
    if not _SURROGATE.search(text):
        return text
    return text.encode('utf-16-le', 'surrogatepass').decode('utf-16-le', 'surrogatepass')


def decompress(compressed: Optional[str], max_output: Optional[int] = None) -> str:
    """Decode an LZ-String ``compressToBase64`` payload.

    Returns ``""`` for empty input and for malformed streams (truncated
    before the end marker, or a code the dictionary cannot resolve).  Any
    other fault is raised as ``DecompressionError`` with the original
    exception as its cause.  ``max_output`` bounds the decoded length in
    UTF-16 code units.
    """
    if compressed is None:
        return ''
    compressed = compressed.strip()
    if not compressed:
        return ''
    try:
        return DictionaryDecoder(BitCursor(compressed), max_output=max_output).run()
    except MalformedStreamError as e:
        logger.warning("Malformed LZ-String stream (%d symbols): %s", len(compressed), e)
        return ''
    except DecompressionError:
        raise
    except Exception as e:
        logger.exception("Failed to decompress LZ-String data")
        raise DecompressionError(f"Decompression failed: {e}") from e
