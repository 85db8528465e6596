"""A fixed-capacity byte buffer for saving and loading binary data."""

from __future__ import annotations

from pathlib import Path

BYTE_SIZE = 8
INT_SIZE = 4


class ByteBuf:
    """Bytes written at a writer index and read back at a reader index."""

    def __init__(self, capacity: int = 4000) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self.bytes = bytearray(capacity)
        self.writer_index = 0
        self.reader_index = 0

    def __bytes__(self) -> bytes:
        return bytes(self.bytes[: self.writer_index])

    def write_byte(self, byte: int) -> None:
        """Append one byte, keeping only its low eight bits."""
        if self.writer_index >= self.capacity:
            raise BufferError("byte buffer is full")
        self.bytes[self.writer_index] = byte & 0xFF
        self.writer_index += 1

    def write_int(self, value: int) -> None:
        """Append a big-endian 32-bit integer; skipped when it does not fit."""
        if self.writer_index + INT_SIZE > self.capacity:
            return
        for byte in (value & 0xFFFFFFFF).to_bytes(INT_SIZE, "big"):
            self.write_byte(byte)

    def write_string(self, text: str) -> None:
        """Append a length-prefixed UTF-8 string."""
        encoded = text.encode("utf-8")
        self.write_int(len(encoded))
        for byte in encoded:
            self.write_byte(byte)

    def read_byte(self) -> int:
        """Read the next byte."""
        if self.reader_index >= self.writer_index:
            raise BufferError("read past the end of the written data")
        byte = self.bytes[self.reader_index]
        self.reader_index += 1
        return byte

    def read_int(self) -> int:
        """Read a big-endian signed 32-bit integer; 0 if fewer than four bytes were ever written."""
        if self.writer_index < INT_SIZE:
            return 0
        raw = bytes(self.read_byte() for _ in range(INT_SIZE))
        return int.from_bytes(raw, "big", signed=True)

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string."""
        length = self.read_int()
        if length < 0:
            raise ValueError(f"negative string length: {length}")
        return bytes(self.read_byte() for _ in range(length)).decode("utf-8")

    def to_bin(self) -> str:
        """Render the written bytes as a string of '0' and '1' characters."""
        return "".join(f"{byte:08b}" for byte in self.bytes[: self.writer_index])

    def load_bin(self, text: str) -> None:
        """Replace the written bytes with those encoded in a '0'/'1' string."""
        count = len(text) // BYTE_SIZE
        if count > self.capacity:
            raise BufferError(f"{count} bytes do not fit in capacity {self.capacity}")
        bits = text[: count * BYTE_SIZE]
        if set(bits) - {"0", "1"}:
            raise ValueError("binary text may only contain '0' and '1'")
        for index, start in enumerate(range(0, len(bits), BYTE_SIZE)):
            self.bytes[index] = int(bits[start : start + BYTE_SIZE], 2)
        self.writer_index = count

    def load_file(self, path: str | Path) -> None:
        """Load bytes from a file holding their '0'/'1' rendering."""
        with open(path, "r", encoding="ascii") as handle:
            text = handle.read(self.capacity * BYTE_SIZE)
        self.load_bin(text)

    def save_file(self, path: str | Path) -> None:
        """Write the '0'/'1' rendering of the written bytes to a file."""
        Path(path).write_text(self.to_bin(), encoding="ascii")