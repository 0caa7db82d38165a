import math

import pytest

from calculator_engine import (
    AngleMode,
    InvalidExpressionError,
    build_scope,
    evaluate_expression,
    format_number,
)


class TestFormatNumber:

    def test_zero(self):
        assert format_number(0) == "0"
        assert format_number(-0.0) == "0"

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite(self, value):
        assert format_number(value) == "Error"

    def test_non_numeric(self):
        assert format_number("abc") == "Error"

    def test_large_uses_scientific(self):
        assert format_number(1e10) == "1.00000000e10"

    def test_small_uses_scientific(self):
        assert format_number(1e-7) == "1.00000000e-7"
        assert format_number(-1.5e-9) == "-1.50000000e-9"

    def test_scientific_mantissa_rounding(self):
        assert format_number(2 ** 100) == "1.26765060e30"

    def test_limits_stay_plain(self):
        assert format_number(1e9) == "1000000000"
        assert format_number(1e-6) == "0.000001"

    def test_notation_follows_rounded_mantissa(self):
        assert format_number(1000000000.4) == "1000000000.4"
        assert format_number(9.999999999e-7) == "0.0000009999999999"
        assert format_number(1000000006.0) == "1.00000001e9"
        assert format_number(9.99999994e-7) == "9.99999994e-7"

    def test_rounds_to_twelve_digits(self):
        assert format_number(123.000000000001) == "123"
        assert format_number(0.1 + 0.2) == "0.3"
        assert format_number(1 / 3) == "0.333333333333"
        assert format_number(2 / 3) == "0.666666666667"

    def test_strips_trailing_zeros(self):
        assert format_number(8.0) == "8"
        assert format_number(-2.50) == "-2.5"

    @pytest.mark.parametrize("value", [
        0.1 + 0.2, 1e10, 1e-7, 2 / 3, -123.456, 987654321.987, 5.0, math.pi,
        1e9, 1e-6, 1000000000.4, -1000000000.4, 9.999999999e-7,
        9.9999999951e-7, 999999999.9999999, 1000000006.0, 9.99999994e-7,
    ])
    def test_idempotent(self, value):
        text = format_number(value)
        assert format_number(float(text)) == text
        assert format_number(text) == text


class TestBuildScope:

    def test_constants(self):
        scope = build_scope(AngleMode.RADIANS)
        assert scope["pi"] == math.pi
        assert scope["e"] == math.e
        assert scope["E"] == math.e

    def test_degrees(self):
        scope = build_scope(AngleMode.DEGREES)
        assert scope["sin"](90) == pytest.approx(1)
        assert scope["cos"](180) == pytest.approx(-1)
        assert scope["tan"](45) == pytest.approx(1)

    def test_radians(self):
        scope = build_scope(AngleMode.RADIANS)
        assert scope["sin"](90) == pytest.approx(0.8939966636)
        assert scope["cos"](math.pi) == pytest.approx(-1)

    def test_direct_functions(self):
        scope = build_scope(AngleMode.DEGREES)
        assert scope["ln"](math.e) == pytest.approx(1)
        assert scope["log10"](1000) == pytest.approx(3)
        assert scope["sqrt"](16) == 4
        assert scope["abs"](-2) == 2

    def test_new_mapping_per_call(self):
        first = build_scope(AngleMode.DEGREES)
        second = build_scope(AngleMode.DEGREES)
        assert first is not second
        first["pi"] = 3
        assert second["pi"] == math.pi


class TestEvaluateExpression:

    def test_returns_float(self):
        result = evaluate_expression("5+3", build_scope(AngleMode.RADIANS))
        assert result == 8
        assert isinstance(result, float)

    def test_angle_mode_changes_trig_only(self):
        deg = evaluate_expression("sin(90)", build_scope(AngleMode.DEGREES))
        rad = evaluate_expression("sin(90)", build_scope(AngleMode.RADIANS))
        assert deg == pytest.approx(1)
        assert rad == pytest.approx(0.8939966636)
        assert evaluate_expression("2^10", build_scope(AngleMode.DEGREES)) == 1024

    @pytest.mark.parametrize("expr", [
        "1/0",
        "sqrt(0-1)",
        "ln(0)",
        "(0-8)^(1/3)",
        "()",
        "1,2",
        "171!",
        "5+",
        "foo",
        "sqrt(1,2)",
    ])
    def test_invalid(self, expr):
        with pytest.raises(InvalidExpressionError):
            evaluate_expression(expr, build_scope(AngleMode.RADIANS))

    def test_error_chains_cause(self):
        with pytest.raises(InvalidExpressionError) as info:
            evaluate_expression("1/0", build_scope(AngleMode.RADIANS))
        assert isinstance(info.value.__cause__, ZeroDivisionError)


def test_angle_mode_toggle():
    assert AngleMode.DEGREES.toggled() is AngleMode.RADIANS
    assert AngleMode.RADIANS.toggled() is AngleMode.DEGREES
    assert AngleMode.DEGREES.label == "DEG"
