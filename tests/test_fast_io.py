import io

import pytest

from fast_io import IntReader, IntWriter


class CountingStream(io.BytesIO):
    def __init__(self):
        super().__init__()
        self.writes = 0

    def write(self, data):
        self.writes += 1
        return super().write(data)


def test_reads_tokens_across_whitespace():
    reader = IntReader(io.BytesIO(b"  12\n\t0 345\r\n7"))

    assert reader.read_ints(4) == [12, 0, 345, 7]


def test_tokens_split_across_buffer_boundaries():
    data = " ".join(str(n) for n in range(1000, 1100)).encode()
    reader = IntReader(io.BytesIO(data), buffer_size=3)

    assert reader.read_ints(100) == list(range(1000, 1100))


def test_exhausted_input_raises_eof():
    reader = IntReader(io.BytesIO(b"5 \n  "))

    assert reader.read_non_negative_int() == 5
    with pytest.raises(EOFError):
        reader.read_non_negative_int()


def test_unexpected_byte_rejected():
    with pytest.raises(ValueError):
        IntReader(io.BytesIO(b"-3")).read_non_negative_int()


def test_writer_buffers_until_flush():
    stream = CountingStream()
    writer = IntWriter(stream)
    for value in (3, 0, 42):
        writer.write_non_negative_int(value)
        writer.write_line()

    assert stream.getvalue() == b""
    writer.flush()
    assert stream.getvalue() == b"3\n0\n42\n"
    assert stream.writes == 1


def test_writer_drains_on_overflow():
    stream = CountingStream()
    writer = IntWriter(stream, buffer_size=4)
    for value in (123, 4567, 8):
        writer.write_non_negative_int(value)
        writer.write_line()
    writer.flush()

    assert stream.getvalue() == b"123\n4567\n8\n"
    assert stream.writes > 1


def test_writer_context_manager_flushes():
    stream = io.BytesIO()
    with IntWriter(stream) as writer:
        writer.write_non_negative_int(9)

    assert stream.getvalue() == b"9"


def test_writer_rejects_negative():
    with pytest.raises(ValueError):
        IntWriter(io.BytesIO()).write_non_negative_int(-1)


@pytest.mark.parametrize("cls", [IntReader, IntWriter])
def test_buffer_size_must_be_positive(cls):
    with pytest.raises(ValueError):
        cls(io.BytesIO(), buffer_size=0)
