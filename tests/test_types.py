import math

from tinyimp.types import format_double, to_string, type_name, values_equal, wrap_int


def test_format_double_plain_range():
    assert format_double(5.0) == '5.0'
    assert format_double(0.5) == '0.5'
    assert format_double(100.0) == '100.0'
    assert format_double(123456.789) == '123456.789'
    assert format_double(0.001) == '0.001'
    assert format_double(-2.25) == '-2.25'


def test_format_double_scientific_range():
    assert format_double(1e7) == '1.0E7'
    assert format_double(12345678.9) == '1.23456789E7'
    assert format_double(1e-4) == '1.0E-4'
    assert format_double(1.5e300) == '1.5E300'
    assert format_double(-3e-10) == '-3.0E-10'


def test_format_double_special_values():
    assert format_double(0.0) == '0.0'
    assert format_double(-0.0) == '-0.0'
    assert format_double(math.nan) == 'NaN'
    assert format_double(math.inf) == 'Infinity'
    assert format_double(-math.inf) == '-Infinity'


def test_format_double_subnormals_keep_two_digits():
    assert format_double(5e-324) == '4.9E-324'
    assert format_double(-5e-324) == '-4.9E-324'
    assert format_double(1e-323) == '9.9E-324'
    assert format_double(1e23) == '1.0E23'


def test_to_string():
    assert to_string(None) == 'null'
    assert to_string(True) == 'true'
    assert to_string(False) == 'false'
    assert to_string(-12) == '-12'
    assert to_string('plain text') == 'plain text'
    assert to_string(2.0) == '2.0'


def test_type_name_keeps_bool_apart_from_int():
    assert type_name(True) == 'bool'
    assert type_name(1) == 'int'
    assert type_name(1.0) == 'float'
    assert type_name('') == 'string'
    assert type_name(None) == 'null'


def test_wrap_int():
    assert wrap_int(5) == 5
    assert wrap_int(2 ** 63) == -(2 ** 63)
    assert wrap_int(-(2 ** 63) - 1) == 2 ** 63 - 1


def test_values_equal():
    assert values_equal(1, 1)
    assert not values_equal(1, 1.0)
    assert not values_equal(True, 1)
    assert values_equal(math.nan, math.nan)
    assert not values_equal(0.0, -0.0)
