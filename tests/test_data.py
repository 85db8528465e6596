import pytest

from ballz.bytebuf import ByteBuf
from ballz.data import (
    Data,
    DataMap,
    DataType,
    data_byte,
    data_double,
    data_float,
    data_int,
    data_list,
    data_long,
    data_map,
    data_short,
    data_string,
    read_data,
    write_data,
)


def _round_trip(data, capacity=512):
    buf = ByteBuf(capacity)
    write_data(buf, data)
    result = read_data(buf)
    assert buf.reader_index == buf.writer_index
    return result


def test_map_insert_get_and_len():
    mapping = DataMap()
    mapping.insert("essence", data_int(3))
    assert mapping.get("essence") == data_int(3)
    assert "essence" in mapping
    assert "missing" not in mapping
    assert len(mapping) == 1


def test_map_get_missing_raises():
    with pytest.raises(KeyError):
        DataMap().get("missing")


def test_map_get_or_default():
    mapping = DataMap()
    mapping.insert("direction", data_int(2))
    assert mapping.get_or_default("direction", data_int(0)) == data_int(2)
    assert mapping.get_or_default("essence", data_int(0)) == data_int(0)


def test_map_duplicate_keys_return_first():
    mapping = DataMap()
    mapping.insert("k", data_int(1))
    mapping.insert("k", data_int(2))
    assert len(mapping) == 2
    assert mapping.get("k") == data_int(1)


@pytest.mark.parametrize(
    "data",
    [
        data_byte(5),
        data_byte(-3),
        data_int(-123456),
        data_int(0),
        data_string("chunk0,0"),
        Data(DataType.CHAR, 65),
    ],
)
def test_scalar_round_trip(data):
    assert _round_trip(data) == data


def test_nested_map_round_trip():
    inner = DataMap()
    inner.insert("0", data_byte(2))
    inner.insert("17", data_byte(3))
    outer = DataMap()
    outer.insert("chunk0,0", data_map(inner))
    outer.insert("name", data_string("world"))
    result = _round_trip(data_map(outer))
    assert result == data_map(outer)
    assert result.value.get("chunk0,0").value.get("17") == data_byte(3)


def test_byte_wire_format():
    buf = ByteBuf(4)
    write_data(buf, data_byte(5))
    assert bytes(buf) == bytes([DataType.BYTE, 5])


def test_empty_map_wire_format():
    buf = ByteBuf(8)
    write_data(buf, data_map(DataMap()))
    assert bytes(buf) == bytes([DataType.MAP, 0, 0, 0, 0])


@pytest.mark.parametrize("data", [data_float(1.5), data_double(2.0), data_short(1), data_long(1)])
def test_unsupported_types_cannot_be_written(data):
    buf = ByteBuf(16)
    with pytest.raises(ValueError):
        write_data(buf, data)
    assert buf.writer_index == 0


@pytest.mark.parametrize("tag", [int(DataType.LIST), 200])
def test_unknown_tag_cannot_be_read(tag):
    buf = ByteBuf(4)
    buf.write_byte(tag)
    with pytest.raises(ValueError):
        read_data(buf)


def test_byte_wraps_like_signed_char():
    assert data_byte(200).value == -56
    assert data_byte(-128).value == -128


def test_int_wraps_at_32_bits():
    assert data_int(2**31).value == -(2**31)
    assert data_int(2**31 - 1).value == 2**31 - 1


def test_float_is_single_precision():
    assert data_float(1.5).value == 1.5
    assert data_float(0.1).value == pytest.approx(0.1, rel=1e-6)
    assert data_float(0.1).value != 0.1


def test_data_map_from_plain_mapping():
    result = data_map({"a": data_int(1), "b": data_string("x")})
    assert result.type is DataType.MAP
    assert result.value.get("b") == data_string("x")
    assert [key for key, _ in result.value] == ["a", "b"]


def test_data_list_holds_items():
    result = data_list(iter([data_int(1), data_int(2)]))
    assert result.type is DataType.LIST
    assert result.value == [data_int(1), data_int(2)]