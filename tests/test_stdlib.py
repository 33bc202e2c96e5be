from __future__ import annotations

import pytest

from formula_eval.runner import run
from formula_eval.stdlib import stdlib_functions
from tests.support.harness import SAMPLE_CONTEXT, ArityError, verify_result

SCENARIOS = [
    pytest.param("@sum(1, 2)", ("number", 3), id="sum"),
    pytest.param("@sum(data.items)", ("number", 60), id="sum-spreads-array"),
    pytest.param("@sum()", ("number", 0), id="sum-empty"),
    pytest.param("@sum(1, \"x\")", ("number", float("nan")), id="sum-nan"),
    pytest.param("@min(3, x, 5)", ("number", 2), id="min"),
    pytest.param("@max(data.items, 7)", ("number", 30), id="max-mixed"),
    pytest.param("@abs(-4)", ("number", 4), id="abs"),
    pytest.param("@round(2.5)", ("number", 3), id="round-half-up"),
    pytest.param("@round(-2.5)", ("number", -2), id="round-negative-half"),
    pytest.param("@round(0.49999999999999994)", ("number", 0), id="round-just-below-half"),
    pytest.param("@floor(1.7)", ("number", 1), id="floor"),
    pytest.param("@ceil(1.2)", ("number", 2), id="ceil"),
    pytest.param("@len(name)", ("number", 3), id="len-string"),
    pytest.param("@len(data.items)", ("number", 3), id="len-array"),
    pytest.param("@len(a)", ("number", 1), id="len-mapping"),
    pytest.param("@upper(name)", ("string", "ADA"), id="upper"),
    pytest.param("@lower(\"MiXeD\")", ("string", "mixed"), id="lower"),
    pytest.param("@concat(\"a\", 1, true, null)", ("string", "a1truenull"), id="concat"),
    pytest.param("@coalesce(nothing, data.missing, 5)", ("number", 5), id="coalesce"),
    pytest.param("@coalesce(nothing)", ("null", None), id="coalesce-all-nullish"),
]


@pytest.mark.parametrize("source, expectation", SCENARIOS)
def test_stdlib_functions(source: str, expectation) -> None:
    kind, expected = expectation
    verify_result(run(source, SAMPLE_CONTEXT), kind, expected)


@pytest.mark.parametrize(
    "source, message",
    [
        pytest.param("@abs()", "Evaluation error: abs expects 1 argument(s); got 0", id="abs-none"),
        pytest.param("@len(1, 2)", "Evaluation error: len expects 1 argument(s); got 2", id="len-two"),
        pytest.param(
            "@max()",
            "Evaluation error: max expects at least 1 argument(s); got 0",
            id="max-none",
        ),
    ],
)
def test_arity_errors(source: str, message: str) -> None:
    with pytest.raises(ArityError) as exc_info:
        run(source)

    assert str(exc_info.value) == message


def test_host_function_shadows_stdlib() -> None:
    assert run("@sum(1, 2)", functions={"sum": lambda *args: "mine"}) == "mine"


def test_stdlib_functions_returns_a_copy() -> None:
    table = stdlib_functions()
    table.pop("sum")

    assert "sum" in stdlib_functions()
