"""Tests for the formatter registry."""

import pytest

from runformat.errors import ConfigurationError
from runformat.formatters import (
    HTMLFormatter,
    JSONFormatter,
    JUnitFormatter,
    NullFormatter,
    PrettyFormatter,
    ProgressFormatter,
    Shape,
    UsageFormatter,
)
from runformat.registry import (
    FormatterDescriptor,
    list_builtins,
    lookup_builtin,
    resolve_custom,
)


class TestBuiltinTable:
    @pytest.mark.parametrize(
        "name,cls",
        [
            ("null", NullFormatter),
            ("junit", JUnitFormatter),
            ("html", HTMLFormatter),
            ("pretty", PrettyFormatter),
            ("progress", ProgressFormatter),
            ("usage", UsageFormatter),
            ("json", JSONFormatter),
        ],
    )
    def test_lookup(self, name, cls):
        descriptor = lookup_builtin(name)
        assert descriptor.type_token == name
        assert descriptor.implementation is cls

    def test_shapes(self):
        assert lookup_builtin("null").accepted_shapes == {Shape.NO_ARG}
        assert lookup_builtin("junit").accepted_shapes == {Shape.SINK_ONLY}
        assert lookup_builtin("html").accepted_shapes == {Shape.PATH_ONLY}
        assert lookup_builtin("pretty").accepted_shapes == {Shape.NO_ARG, Shape.SINK_ONLY}
        assert lookup_builtin("usage").accepted_shapes == {Shape.NO_ARG, Shape.SINK_ONLY}
        assert lookup_builtin("json").accepted_shapes == {Shape.SINK_ONLY}

    def test_unknown_returns_none(self):
        assert lookup_builtin("xml") is None
        assert lookup_builtin("Pretty") is None

    def test_list_builtins(self):
        names = [d.type_token for d in list_builtins()]
        assert names == ["null", "junit", "html", "pretty", "progress", "usage", "json"]


class TestResolveCustom:
    def test_dotted_builtin_class(self):
        descriptor = resolve_custom("runformat.formatters.PrettyFormatter")
        assert descriptor.implementation is PrettyFormatter
        assert descriptor.type_token == "runformat.formatters.PrettyFormatter"

    def test_submodule_class(self):
        descriptor = resolve_custom("runformat.formatters.null.NullFormatter")
        assert descriptor.implementation is NullFormatter

    def test_no_dot_returns_none(self):
        assert resolve_custom("nosuchformatter") is None

    def test_empty_parts_return_none(self):
        assert resolve_custom("runformat..PrettyFormatter") is None
        assert resolve_custom("") is None

    def test_unimportable_returns_none(self):
        assert resolve_custom("no_such_package.sub.Formatter") is None

    def test_missing_attribute_raises(self):
        with pytest.raises(ConfigurationError, match="Could not load formatter runformat.formatters.Nope"):
            resolve_custom("runformat.formatters.Nope")

    def test_non_class_raises(self):
        with pytest.raises(ConfigurationError, match="is not a formatter"):
            resolve_custom("runformat.registry.lookup_builtin")


class TestFormatterDescriptor:
    def test_of_reads_class_shapes(self):
        descriptor = FormatterDescriptor.of("pretty", PrettyFormatter)
        assert descriptor.accepted_shapes == PrettyFormatter.accepted_shapes

    def test_construct_no_arg(self):
        descriptor = FormatterDescriptor.of("null", NullFormatter)
        assert isinstance(descriptor.construct(Shape.NO_ARG), NullFormatter)

    def test_construct_path_only(self, tmp_path):
        descriptor = FormatterDescriptor.of("html", HTMLFormatter)
        formatter = descriptor.construct(Shape.PATH_ONLY, path=tmp_path)
        assert formatter.report_dir == tmp_path
