import pytest

from fancyqr.types import (
    DataOverCapacity,
    DataTooLong,
    Ecc,
    Mask,
    SegmentTooLong,
    Version,
    get_bit,
)


def test_ecc_ordinals_follow_declaration_order():
    assert Ecc.LOW.ordinal() == 0
    assert Ecc.MEDIUM.ordinal() == 1
    assert Ecc.QUARTILE.ordinal() == 2
    assert Ecc.HIGH.ordinal() == 3


@pytest.mark.parametrize(
    "ecc, bits",
    [(Ecc.LOW, 1), (Ecc.MEDIUM, 0), (Ecc.QUARTILE, 3), (Ecc.HIGH, 2)],
)
def test_ecc_format_bits(ecc, bits):
    assert ecc.format_bits() == bits


def test_ecc_ordering():
    ordered = sorted([Ecc.HIGH, Ecc.LOW, Ecc.QUARTILE, Ecc.MEDIUM])
    assert ordered == [Ecc.LOW, Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH]
    assert Ecc.LOW < Ecc.MEDIUM < Ecc.QUARTILE < Ecc.HIGH
    highest = max(Ecc.MEDIUM, Ecc.HIGH, Ecc.LOW, Ecc.QUARTILE)
    lowest = min(Ecc.HIGH, Ecc.QUARTILE, Ecc.LOW)
    assert highest is Ecc.HIGH
    assert lowest is Ecc.LOW
    assert Ecc.HIGH.ordinal() == 3
    assert Ecc.LOW.format_bits() == 1


def test_version_bounds():
    assert Version.MIN.value == 1
    assert Version.MAX.value == 40
    assert Version.MIN < Version(20) < Version.MAX


@pytest.mark.parametrize("bad", [0, 41, -1])
def test_version_out_of_range(bad):
    with pytest.raises(ValueError):
        Version(bad)


def test_version_equality():
    assert Version(7) == Version(7)
    assert Version(7) <= Version(8)


def test_mask_range():
    assert [Mask(i).value for i in range(8)] == list(range(8))


@pytest.mark.parametrize("bad", [8, -1])
def test_mask_out_of_range(bad):
    with pytest.raises(ValueError):
        Mask(bad)


def test_segment_too_long_message():
    err = SegmentTooLong()
    assert isinstance(err, DataTooLong)
    assert str(err) == "Segment too long"


def test_data_over_capacity_message():
    err = DataOverCapacity(100, 72)
    assert isinstance(err, DataTooLong)
    assert (err.datalen, err.maxcapacity) == (100, 72)
    assert str(err) == "Data length = 100 bits, Max capacity = 72 bits"


def test_data_too_long_can_be_caught_as_base():
    err = DataOverCapacity(1, 0)
    assert isinstance(err, DataTooLong)
    assert isinstance(err, Exception)
    assert (err.datalen, err.maxcapacity) == (1, 0)
    assert str(err) == "Data length = 1 bits, Max capacity = 0 bits"


def test_get_bit():
    value = 0b1011
    assert [get_bit(value, i) for i in range(5)] == [True, True, False, True, False]