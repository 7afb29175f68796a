"""Binary wire codec for node-to-node messages.

Fields are written in a fixed order with no tags or version marker:

- vint: unsigned 7-bit groups, low group first, high bit set on all but the last byte
- string: vint byte length followed by UTF-8 bytes
- optional string: one presence byte (0 or 1) followed by a string when present
- enum: vint ordinal of the member in declaration order
"""

from enum import Enum
from typing import Optional, Type, TypeVar

from common.exceptions import TruncatedOrCorruptError

E = TypeVar('E', bound=Enum)

# 5 groups of 7 bits cover a 32-bit value.
MAX_VINT_BYTES = 5


class StreamOutput:
    """Append-only buffer that encodes primitive values."""

    def __init__(self):
        self._buffer = bytearray()

    def write_byte(self, value: int) -> None:
        self._buffer.append(value & 0xFF)

    def write_bool(self, value: bool) -> None:
        self.write_byte(1 if value else 0)

    def write_vint(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"vint cannot encode negative value {value}")
        while value & ~0x7F:
            self.write_byte((value & 0x7F) | 0x80)
            value >>= 7
        self.write_byte(value)

    def write_string(self, value: str) -> None:
        encoded = value.encode('utf-8')
        self.write_vint(len(encoded))
        self._buffer.extend(encoded)

    def write_optional_string(self, value: Optional[str]) -> None:
        if value is None:
            self.write_bool(False)
        else:
            self.write_bool(True)
            self.write_string(value)

    def write_enum(self, value: Enum) -> None:
        self.write_vint(list(type(value)).index(value))

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)


class StreamInput:
    """Cursor over a byte payload that decodes what StreamOutput wrote."""

    def __init__(self, data: bytes):
        self._data = memoryview(data)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._position

    def _take(self, count: int) -> memoryview:
        if count > self.remaining:
            raise TruncatedOrCorruptError(
                f"Expected {count} byte(s) at offset {self._position}, "
                f"only {self.remaining} available"
            )
        chunk = self._data[self._position:self._position + count]
        self._position += count
        return chunk

    def read_byte(self) -> int:
        return self._take(1)[0]

    def read_bool(self) -> bool:
        value = self.read_byte()
        if value not in (0, 1):
            raise TruncatedOrCorruptError(
                f"Invalid boolean byte {value} at offset {self._position - 1}"
            )
        return value == 1

    def read_vint(self) -> int:
        result = 0
        for shift in range(0, 7 * MAX_VINT_BYTES, 7):
            byte = self.read_byte()
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return result
        raise TruncatedOrCorruptError(f"vint longer than {MAX_VINT_BYTES} bytes")

    def read_string(self) -> str:
        length = self.read_vint()
        raw = self._take(length)
        try:
            return raw.tobytes().decode('utf-8')
        except UnicodeDecodeError as e:
            raise TruncatedOrCorruptError(f"Invalid UTF-8 string: {e}") from e

    def read_optional_string(self) -> Optional[str]:
        if self.read_bool():
            return self.read_string()
        return None

    def read_enum(self, enum_class: Type[E]) -> E:
        ordinal = self.read_vint()
        members = list(enum_class)
        if ordinal >= len(members):
            raise TruncatedOrCorruptError(
                f"Unknown {enum_class.__name__} ordinal {ordinal}"
            )
        return members[ordinal]

    def ensure_consumed(self) -> None:
        if self.remaining:
            raise TruncatedOrCorruptError(
                f"{self.remaining} unexpected trailing byte(s)"
            )
