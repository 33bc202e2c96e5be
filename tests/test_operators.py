from __future__ import annotations

import math

import pytest

from tests.support.harness import (
    NonNumericNegation,
    UndefinedVariable,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param("1 + 2", ("number", 3), None, id="add-numbers"),
    pytest.param('"a" + 1', ("string", "a1"), None, id="add-string-number"),
    pytest.param('1 + "a"', ("string", "1a"), None, id="add-number-string"),
    pytest.param('1.5 + "x"', ("string", "1.5x"), None, id="add-fraction-string"),
    pytest.param("true + 1", ("string", "true1"), None, id="add-bool-is-not-numeric"),
    pytest.param('null + "x"', ("string", "nullx"), None, id="add-null-string"),
    pytest.param('"n=" + data.missing', ("string", "n=undefined"), None, id="add-undefined-string"),
    pytest.param("x + y * 2", ("number", 8), None, id="context-precedence"),
    pytest.param("2 + 3 * 4", ("number", 14), None, id="mul-binds-tighter"),
    pytest.param("(2 + 3) * 4", ("number", 20), None, id="grouping"),
    pytest.param("10 - 4 - 3", ("number", 3), None, id="sub-left-assoc"),
    pytest.param("1e3 + .5", ("number", 1000.5), None, id="number-forms"),
    pytest.param("10 % 3", ("number", 1), None, id="mod-basic"),
    pytest.param("-7 % 3", ("number", -1), None, id="mod-dividend-sign"),
    pytest.param("5 % 0", ("number", math.nan), None, id="mod-zero"),
    pytest.param("1 / 0", ("number", math.inf), None, id="div-zero-positive"),
    pytest.param("-1 / 0", ("number", -math.inf), None, id="div-zero-negative"),
    pytest.param("0 / 0", ("number", math.nan), None, id="div-zero-zero"),
    pytest.param('"6" * "7"', ("number", 42), None, id="mul-numeric-strings"),
    pytest.param('"abc" - 1', ("number", math.nan), None, id="sub-non-numeric"),
    pytest.param("1 === 1", ("bool", True), None, id="eq-same"),
    pytest.param('1 === "1"', ("bool", False), None, id="eq-no-coercion"),
    pytest.param('"a" !== "b"', ("bool", True), None, id="neq-strings"),
    pytest.param("null === null", ("bool", True), None, id="eq-null"),
    pytest.param("nothing === null", ("bool", True), None, id="eq-stored-null"),
    pytest.param("data.missing === null", ("bool", False), None, id="eq-undefined-vs-null"),
    pytest.param("data === data", ("bool", True), None, id="eq-object-identity"),
    pytest.param("0 / 0 === 0 / 0", ("bool", False), None, id="eq-nan"),
    pytest.param('"10" > 9', ("bool", True), None, id="gt-coerces"),
    pytest.param('"abc" < 1', ("bool", False), None, id="lt-nan"),
    pytest.param("2 >= 2", ("bool", True), None, id="ge"),
    pytest.param("1 <= 0", ("bool", False), None, id="le"),
    pytest.param("true && false", ("bool", False), None, id="and"),
    pytest.param("false || true", ("bool", True), None, id="or"),
    pytest.param('1 && "x"', ("bool", True), None, id="and-returns-bool"),
    pytest.param('0 || ""', ("bool", False), None, id="or-falsy"),
    pytest.param("!0", ("bool", True), None, id="not-zero"),
    pytest.param('!"x"', ("bool", False), None, id="not-string"),
    pytest.param("--5", ("number", 5), None, id="double-negation"),
    pytest.param("-x", ("number", -2), None, id="negate-context"),
    pytest.param('-"5"', None, NonNumericNegation, id="negate-string"),
    pytest.param("-flag", None, NonNumericNegation, id="negate-bool"),
    pytest.param('flag ? "yes" : "no"', ("string", "yes"), None, id="ternary-true"),
    pytest.param("0 ? 1 : 2", ("number", 2), None, id="ternary-false"),
    pytest.param("false ? 1 : true ? 2 : 3", ("number", 2), None, id="ternary-right-assoc"),
    pytest.param('a.b + x > 10 ? "big" : "small"', ("string", "small"), None, id="ternary-composite"),
    pytest.param('"\\u0041\\n"', ("string", "A\n"), None, id="string-escapes"),
    pytest.param("'single'", ("string", "single"), None, id="single-quoted"),
    pytest.param("missing + 1", None, UndefinedVariable, id="undefined-variable"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_operators(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


HUGE = 10**400


@pytest.mark.parametrize(
    "source, context, expectation",
    [
        pytest.param("x - 1", {"x": HUGE}, ("number", math.inf), id="huge-int-subtract"),
        pytest.param("x + 1", {"x": -HUGE}, ("number", -math.inf), id="huge-negative-int-add"),
        pytest.param("-x", {"x": HUGE}, ("number", -math.inf), id="huge-int-negate"),
        pytest.param("x > 1", {"x": HUGE}, ("bool", True), id="huge-int-compare"),
        pytest.param('"0x' + "f" * 300 + '" - 1', {}, ("number", math.inf), id="huge-hex-string"),
    ],
)
def test_numbers_past_float_range_become_infinity(source: str, context: dict, expectation) -> None:
    run_runtime_case(source, expectation, None, context)
