# Поиск повторяющейся последовательности байтов в скользящем окне

"""
LZ77 Compression Module

Жадный LZ77: поиск самого длинного совпадения в окне, кодирование
токенов (литерал / ссылка) и восстановление исходных данных.
"""

import struct
import io
import sys
from dataclasses import dataclass
from typing import List, Tuple, Optional, Union, Iterable, Iterator


WINDOW_SIZE = 4096
MIN_MATCH = 3
MAX_MATCH = 258
MAX_FIELD = 0xFFFF

LITERAL_SIZE = 2
REFERENCE_SIZE = 5

_REFERENCE_FIELDS = struct.Struct('>HH')


class TokenType:
    LITERAL = 0x00
    REFERENCE = 0x01


class LZ77Error(Exception):
    pass


class InvalidData(LZ77Error, ValueError):
    """Повреждённые или неверно сформированные сжатые данные."""


class AllocationFailure(LZ77Error, MemoryError):
    """Не удалось увеличить выходной буфер."""


class ConfigurationError(LZ77Error, ValueError):
    """Параметры сжатия нарушают ограничения формата."""


@dataclass(frozen=True)
class LZ77Config:
    window_size: int = WINDOW_SIZE
    min_match: int = MIN_MATCH
    max_match: int = MAX_MATCH

    def __post_init__(self):
        for name in ('window_size', 'min_match', 'max_match'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")

        if not 1 <= self.window_size <= MAX_FIELD:
            raise ConfigurationError(
                f"window_size must be in [1, {MAX_FIELD}], got {self.window_size}")
        if self.min_match < 1:
            raise ConfigurationError(f"min_match must be at least 1, got {self.min_match}")
        if self.max_match < self.min_match:
            raise ConfigurationError(
                f"max_match ({self.max_match}) is less than min_match ({self.min_match})")
        if self.max_match > MAX_FIELD:
            raise ConfigurationError(
                f"max_match must not exceed {MAX_FIELD}, got {self.max_match}")


DEFAULT_CONFIG = LZ77Config()


@dataclass(frozen=True)
class Literal:
    byte: int

    def __repr__(self):
        return f"LITERAL({self.byte:02x})"


@dataclass(frozen=True)
class Reference:
    offset: int
    length: int

    def __repr__(self):
        return f"REFERENCE(off={self.offset}, len={self.length})"


Token = Union[Literal, Reference]


def _match_length(data: bytes, candidate: int, pos: int, length: int, limit: int) -> int:
    while length < limit and data[candidate + length] == data[pos + length]:
        length += 1
    return length


def find_match(data: Union[bytes, bytearray, memoryview], pos: int, window_size: int,
               min_match: int, max_match: int) -> Tuple[int, int]:
    """
    Самое длинное совпадение для позиции pos среди начал
    [pos - window_size, pos). При равной длине побеждает самое
    дальнее смещение, как при прямом просмотре окна.

    Возвращает (offset, length) или (0, 0), если совпадения нет.
    """
    if isinstance(data, memoryview):
        data = data.tobytes()

    window_start = max(0, pos - window_size)
    limit = min(max_match, len(data) - pos)

    if limit < min_match or window_start >= pos:
        return 0, 0

    best_pos = -1
    best_length = 0
    needed = min_match
    search_from = window_start

    # bytes.find returns the earliest candidate whose first `needed` bytes
    # match; the search end keeps the candidate start strictly before pos.
    while needed <= limit:
        candidate = data.find(data[pos:pos + needed], search_from, pos + needed - 1)
        if candidate < 0:
            break

        best_pos = candidate
        best_length = _match_length(data, candidate, pos, needed, limit)

        if best_length == limit:
            break

        needed = best_length + 1
        search_from = candidate + 1

    if best_pos < 0:
        return 0, 0
    return pos - best_pos, best_length


class MatchFinder:
    def __init__(self, data: bytes, config: LZ77Config = DEFAULT_CONFIG):
        self.data = data
        self.config = config

    def find(self, pos: int) -> Tuple[int, int]:
        return find_match(self.data, pos, self.config.window_size,
                          self.config.min_match, self.config.max_match)


def _as_bytes(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)


class LZ77Compressor:
    def __init__(self, window_size: Optional[int] = None,
                 min_match: Optional[int] = None,
                 max_match: Optional[int] = None,
                 config: Optional[LZ77Config] = None):
        overrides = {
            name: value for name, value in (
                ('window_size', window_size),
                ('min_match', min_match),
                ('max_match', max_match),
            ) if value is not None
        }

        if config is None:
            config = LZ77Config(**overrides)
        elif overrides:
            raise ConfigurationError(
                f"pass either config or {', '.join(overrides)}, not both")
        self.config = config

    @property
    def window_size(self) -> int:
        return self.config.window_size

    @property
    def min_match(self) -> int:
        return self.config.min_match

    @property
    def max_match(self) -> int:
        return self.config.max_match

    def compress(self, data: Union[bytes, bytearray, memoryview, str]) -> List[Token]:
        data = _as_bytes(data)
        tokens: List[Token] = []
        if not data:
            return tokens

        matcher = MatchFinder(data, self.config)

        try:
            pos = 0
            while pos < len(data):
                offset, length = matcher.find(pos)

                if length >= self.min_match:
                    tokens.append(Reference(offset, length))
                    pos += length
                else:
                    tokens.append(Literal(data[pos]))
                    pos += 1
        except MemoryError as e:
            raise AllocationFailure("out of memory while compressing") from e

        return tokens

    @staticmethod
    def decompress(tokens: Iterable[Token]) -> bytes:
        output = bytearray()

        try:
            for token in tokens:
                if isinstance(token, Literal):
                    if not 0 <= token.byte <= 0xFF:
                        raise InvalidData(f"literal value {token.byte} does not fit in a byte")
                    output.append(token.byte)

                elif isinstance(token, Reference):
                    if token.offset < 1 or token.offset > len(output):
                        raise InvalidData(
                            f"reference offset {token.offset} outside output of "
                            f"{len(output)} bytes")
                    if token.length < 0:
                        raise InvalidData(f"negative reference length {token.length}")

                    match_pos = len(output) - token.offset

                    # byte by byte: with length > offset the copy reads what it writes
                    for _ in range(token.length):
                        output.append(output[match_pos])
                        match_pos += 1

                else:
                    raise InvalidData(f"not an LZ77 token: {token!r}")
        except MemoryError as e:
            raise AllocationFailure("out of memory while decompressing") from e

        return bytes(output)


class TokenEncoder:
    @staticmethod
    def encode_tokens(tokens: Iterable[Token]) -> bytes:
        output = io.BytesIO()

        for token in tokens:
            if isinstance(token, Literal):
                if not 0 <= token.byte <= 0xFF:
                    raise InvalidData(f"literal value {token.byte} does not fit in a byte")
                output.write(struct.pack('BB', TokenType.LITERAL, token.byte))

            elif isinstance(token, Reference):
                if not (0 <= token.offset <= MAX_FIELD and 0 <= token.length <= MAX_FIELD):
                    raise InvalidData(f"{token!r} does not fit in 16-bit fields")
                output.write(struct.pack('B', TokenType.REFERENCE))
                output.write(_REFERENCE_FIELDS.pack(token.offset, token.length))

            else:
                raise InvalidData(f"not an LZ77 token: {token!r}")

        return output.getvalue()

    @staticmethod
    def iter_tokens(data: bytes) -> Iterator[Token]:
        pos = 0

        while pos < len(data):
            token_type = data[pos]
            pos += 1

            if token_type == TokenType.LITERAL:
                if pos >= len(data):
                    raise InvalidData(f"truncated literal record at position {pos - 1}")
                yield Literal(data[pos])
                pos += 1

            elif token_type == TokenType.REFERENCE:
                if pos + _REFERENCE_FIELDS.size > len(data):
                    raise InvalidData(f"truncated reference record at position {pos - 1}")
                offset, length = _REFERENCE_FIELDS.unpack_from(data, pos)
                pos += _REFERENCE_FIELDS.size
                yield Reference(offset, length)

            else:
                raise InvalidData(f"invalid token type 0x{token_type:02x} at position {pos - 1}")

    @staticmethod
    def decode_tokens(data: bytes) -> List[Token]:
        return list(TokenEncoder.iter_tokens(data))


def compress(data: Union[bytes, bytearray, memoryview, str],
             config: Optional[LZ77Config] = None) -> List[Token]:
    return LZ77Compressor(config=config or DEFAULT_CONFIG).compress(data)


def decompress(tokens: Iterable[Token]) -> bytes:
    return LZ77Compressor.decompress(tokens)


def decompress_to_string(tokens: Iterable[Token], encoding: str = 'utf-8') -> str:
    return decompress(tokens).decode(encoding)


def encode_tokens(tokens: Iterable[Token]) -> bytes:
    return TokenEncoder.encode_tokens(tokens)


def decode_tokens(data: bytes) -> List[Token]:
    return TokenEncoder.decode_tokens(data)


def compress_to_binary(data: Union[bytes, bytearray, memoryview, str],
                       config: Optional[LZ77Config] = None) -> bytes:
    return encode_tokens(compress(data, config))


def decompress_binary(data: bytes) -> bytes:
    return decompress(TokenEncoder.iter_tokens(data))


class CompressionStats:
    def __init__(self, tokens: List[Token], original_size: int):
        self.tokens = tokens
        self.original_size = original_size

        self.literal_count = sum(1 for t in tokens if isinstance(t, Literal))
        self.reference_count = sum(1 for t in tokens if isinstance(t, Reference))

        self.total_reference_length = sum(
            t.length for t in tokens if isinstance(t, Reference)
        )

        self.encoded_size = (
            self.literal_count * LITERAL_SIZE +
            self.reference_count * REFERENCE_SIZE
        )

        self.compression_ratio = (
            self.encoded_size / original_size * 100
            if original_size > 0 else 0
        )

    @property
    def average_reference_length(self) -> float:
        if self.reference_count == 0:
            return 0.0
        return self.total_reference_length / self.reference_count

    def summary(self) -> str:
        return (f"{self.original_size} -> {self.encoded_size} bytes "
                f"({self.compression_ratio:.1f}%)")

    def print_stats(self, file=None):
        file = file or sys.stderr
        print("LZ77 Compression Statistics:", file=file)
        print(f"  Original size:       {self.original_size} bytes", file=file)
        print(f"  Literals:            {self.literal_count}", file=file)
        print(f"  References:          {self.reference_count}", file=file)
        print(f"  Total match length:  {self.total_reference_length}", file=file)
        if self.reference_count > 0:
            print(f"  Avg match length:    {self.average_reference_length:.1f}", file=file)
        print(f"  Encoded size:        {self.encoded_size} bytes", file=file)
        print(f"  Compression ratio:   {self.compression_ratio:.1f}%", file=file)
