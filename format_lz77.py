"""
Определяет необязательный заголовок контейнера LZ77 и методы чтения/записи.

Контейнер: b'LZ77R1' + window_size (u16 BE) + max_match (u16 BE),
за ним поток токенов без изменений.
"""

import struct
import io
from dataclasses import dataclass
from typing import List, Tuple

from lz77_compressor import (
    LZ77Config, Token, Reference, InvalidData, TokenEncoder, LZ77Compressor,
)


CONTAINER_MAGIC = b'LZ77R1'

_HEADER_FIELDS = struct.Struct('>HH')
HEADER_SIZE = len(CONTAINER_MAGIC) + _HEADER_FIELDS.size


@dataclass(frozen=True)
class ContainerHeader:
    window_size: int
    max_match: int

    magic = CONTAINER_MAGIC

    @classmethod
    def from_config(cls, config: LZ77Config) -> 'ContainerHeader':
        return cls(config.window_size, config.max_match)

    def serialize(self) -> bytes:
        output = io.BytesIO()
        output.write(self.magic)
        output.write(_HEADER_FIELDS.pack(self.window_size, self.max_match))
        return output.getvalue()

    @staticmethod
    def deserialize(data: bytes) -> 'ContainerHeader':
        if len(data) < HEADER_SIZE:
            raise InvalidData("Container header is truncated")

        if data[:len(CONTAINER_MAGIC)] != CONTAINER_MAGIC:
            raise InvalidData("Invalid container magic")

        window_size, max_match = _HEADER_FIELDS.unpack_from(data, len(CONTAINER_MAGIC))
        return ContainerHeader(window_size, max_match)

    def check_token(self, token: Token):
        if not isinstance(token, Reference):
            return
        if token.offset > self.window_size:
            raise InvalidData(
                f"Reference offset {token.offset} exceeds window size {self.window_size}")
        if token.length > self.max_match:
            raise InvalidData(
                f"Reference length {token.length} exceeds max match {self.max_match}")


class ContainerFormat:
    @staticmethod
    def has_header(data: bytes) -> bool:
        # raw token streams start with tag 0x00 or 0x01, never with 'L'
        return data[:len(CONTAINER_MAGIC)] == CONTAINER_MAGIC

    @staticmethod
    def wrap(config: LZ77Config, payload: bytes) -> bytes:
        return ContainerHeader.from_config(config).serialize() + payload

    @staticmethod
    def unwrap(data: bytes) -> Tuple[ContainerHeader, bytes]:
        header = ContainerHeader.deserialize(data)
        return header, data[HEADER_SIZE:]

    @staticmethod
    def read_tokens(data: bytes) -> List[Token]:
        header, payload = ContainerFormat.unwrap(data)
        tokens = []
        for token in TokenEncoder.iter_tokens(payload):
            header.check_token(token)
            tokens.append(token)
        return tokens

    @staticmethod
    def decompress(data: bytes) -> bytes:
        return LZ77Compressor.decompress(ContainerFormat.read_tokens(data))
