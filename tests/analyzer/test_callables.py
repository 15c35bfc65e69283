"""Tests for the callable model builder."""

import pytest

from bindmodel.analyzer import types
from bindmodel.analyzer.callables import classify_results, new_const, new_func
from bindmodel.analyzer.config import AnalysisConfig
from bindmodel.analyzer.context import AnalysisContext
from bindmodel.analyzer.docs import PackageDoc
from bindmodel.analyzer.errors import (
    BindError,
    InvalidDualReturnError,
    TooManyResultsError,
)

INT = types.BASIC_TYPES["int"]


def func(name, params=(), results=()):
    return types.Func(
        name,
        types.Signature(
            params=types.Tuple(tuple(types.Var(n, t, "calc") for n, t in params)),
            results=types.Tuple(tuple(types.Var("", t, "calc") for t in results)),
        ),
        "calc",
    )


@pytest.fixture
def ctx():
    return AnalysisContext(
        pkg=types.Package(name="calc"),
        doc=PackageDoc(name="calc"),
        config=AnalysisConfig(),
        trace=lambda line: None,
    )


class TestResultArity:
    """Test cases for return and error classification."""

    def test_no_results(self, ctx):
        model = new_func(ctx, "", func("Reset"))
        assert model.ret is None
        assert model.err is False

    def test_single_value(self, ctx):
        model = new_func(ctx, "", func("Count", results=[INT]))
        assert model.ret is INT
        assert model.err is False

    def test_error_only(self, ctx):
        # Arrange
        validate = func(
            "Validate", params=[("s", types.STRING)], results=[types.ERROR_TYPE]
        )

        # Act
        model = new_func(ctx, "", validate)

        # Assert
        assert model.ret is None
        assert model.err is True

    def test_value_and_error(self, ctx):
        # Arrange
        divide = func(
            "Divide", params=[("a", INT), ("b", INT)], results=[INT, types.ERROR_TYPE]
        )

        # Act
        model = new_func(ctx, "", divide)

        # Assert
        assert model.ret is INT
        assert model.err is True
        assert model.id == "calc_Divide"
        assert [p.name for p in model.sig.params] == ["a", "b"]
        assert len(model.sig.results) == 2
        assert model.sig.recv is None
        assert model.ctor is False

    def test_second_result_must_be_error(self, ctx):
        pair = func("Pair", results=[INT, INT])

        with pytest.raises(InvalidDualReturnError) as excinfo:
            new_func(ctx, "", pair)

        assert "Pair" in str(excinfo.value)
        assert excinfo.value.obj is pair

    def test_too_many_results(self, ctx):
        total = func(
            "Sum",
            params=[("a", INT), ("b", INT)],
            results=[INT, INT, types.ERROR_TYPE],
        )

        with pytest.raises(TooManyResultsError) as excinfo:
            new_func(ctx, "", total)

        assert "Sum" in str(excinfo.value)
        assert isinstance(excinfo.value, BindError)

    def test_classify_results_directly(self):
        assert classify_results(func("F"), func("F").signature) == (None, False)


class TestIdentity:
    """Test cases for callable and constant identities."""

    def test_method_identity_includes_enclosing_type(self, ctx):
        model = new_func(ctx, "Point", func("String", results=[types.STRING]))
        assert model.id == "calc_Point_String"

    def test_custom_separator(self):
        ctx = AnalysisContext(
            pkg=types.Package(name="calc"),
            doc=PackageDoc(name="calc"),
            config=AnalysisConfig(id_separator="."),
            trace=lambda line: None,
        )
        assert new_func(ctx, "Point", func("String")).id == "calc.Point.String"

    def test_const_getter(self, ctx):
        # Act
        const = new_const(ctx, types.Const("Max", INT, "calc", "10"))

        # Assert
        assert const.id == "calc_Max"
        assert const.getter.id == "get_calc_Max"
        assert const.getter.ret is INT
        assert const.getter.sig.params == []
        assert [r.name for r in const.getter.sig.results] == ["ret"]
        assert const.getter.err is False
