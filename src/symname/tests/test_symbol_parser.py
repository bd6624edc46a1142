"""Pytest-style tests for SymbolParser core functionality."""

import pytest

from symname import NoticeKind, ParsedSymbol, SymbolParser, parse_symbol


class TestSymbolParser:
    """Test cases for SymbolParser class using pytest."""

    def test_parser_initialization(self):
        """Test parser initialization with default config."""
        parser = SymbolParser()
        assert parser.config['strict_mode'] is False
        assert parser.config['max_length'] == 4096

    def test_parser_with_custom_config(self):
        """Test parser initialization with custom configuration."""
        parser = SymbolParser({'strict_mode': True, 'max_length': 10})
        assert parser.config['strict_mode'] is True
        assert parser.config['max_length'] == 10

    def test_package_function(self, parser):
        """Test receiver-free identifier."""
        symbol = parser.parse("pkg.Func")
        assert symbol.package_path == "pkg"
        assert symbol.qualifier == ""
        assert symbol.receiver_is_pointer is False
        assert symbol.func_name == "Func"
        assert symbol.notice == ""

    def test_pointer_receiver(self, parser):
        """Test "(*T)" receiver sets the pointer marker."""
        symbol = parser.parse("pkg.(*T).M")
        assert symbol.package_path == "pkg"
        assert symbol.qualifier == "T"
        assert symbol.receiver_is_pointer is True
        assert symbol.func_name == "M"

    def test_generic_receiver_and_method(self, parser):
        """Test generic arguments on both the receiver and the method."""
        symbol = parser.parse("pkg.(*T[int]).M[string]")
        assert symbol.package_path == "pkg"
        assert symbol.qualifier == "T"
        assert symbol.receiver_is_pointer is True
        assert symbol.type_generic_args == "int"
        assert symbol.func_generic_args == "string"
        assert symbol.func_name == "M"

    def test_nested_path_with_numeric_dot_segment(self, parser):
        """Test a dot inside the last path segment is kept when it cannot be a function."""
        symbol = parser.parse("a/b.1.(*File).Read")
        assert symbol.package_path == "a/b.1"
        assert symbol.qualifier == "File"
        assert symbol.receiver_is_pointer is True
        assert symbol.func_name == "Read"
        assert not symbol.has_embedded_caller

    def test_anonymous_closure(self, parser):
        """Test closure suffix is stripped and the enclosing name recovered."""
        symbol = parser.parse("pkg.Outer.Inner.func1")
        assert symbol.func_name == "Inner"
        assert symbol.qualifier == "Outer"
        assert symbol.package_path == "pkg"
        assert "anonymous function" in symbol.notice
        assert symbol.is_anonymous
        assert symbol.notice_kinds == [NoticeKind.ANONYMOUS_CLOSURE]

    def test_anonymous_closure_without_enclosing_name(self, parser):
        """Test a bare closure label keeps the whole text as the function name."""
        symbol = parser.parse("main.func1")
        assert symbol.func_name == "main.func1"
        assert symbol.package_path == ""
        assert not symbol.is_anonymous

    def test_generic_receiver_with_qualified_argument(self, parser, generic_receiver_name):
        """Test generic arguments that embed their own import path."""
        symbol = parser.parse(generic_receiver_name)
        assert symbol.package_path == "github.com/xhd2015/xgo/runtime/test/debug"
        assert symbol.qualifier == "GenericSt"
        assert symbol.receiver_is_pointer is False
        assert symbol.type_generic_args == "github.com/xhd2015/xgo/runtime/test/debug.Inner"
        assert symbol.func_generic_args == ""
        assert symbol.func_name == "GetData"

    def test_embedded_calling_function_before_paren(self, parser):
        """Test a calling-function name glued onto the package path is split off."""
        symbol = parser.parse("mod/app.Run.(*worker).Do")
        assert symbol.package_path == "mod/app"
        assert symbol.qualifier == "worker"
        assert symbol.receiver_is_pointer is True
        assert symbol.func_name == "Do"
        assert symbol.has_embedded_caller
        assert "Run" in symbol.notice

    def test_embedded_calling_function_without_paren(self, parser):
        """Test an unparenthesized calling function replaces the qualifier."""
        symbol = parser.parse("app.Run.worker.Do")
        assert symbol.package_path == "app"
        assert symbol.qualifier == "Run"
        assert symbol.func_name == "Do"
        assert symbol.notice_kinds == [NoticeKind.EMBEDDED_CALLING_FUNCTION]

    def test_anonymous_closure_with_embedded_caller(self, parser):
        """Test both notices accumulate on one parse."""
        symbol = parser.parse("app.Run.worker.Do.func3")
        assert symbol.func_name == "Do"
        assert symbol.qualifier == "Run"
        assert symbol.notice_kinds == [
            NoticeKind.ANONYMOUS_CLOSURE,
            NoticeKind.EMBEDDED_CALLING_FUNCTION,
        ]
        assert symbol.notice.count("; ") == 1

    def test_name_without_dot(self, parser):
        """Test a bare identifier is all function name."""
        symbol = parser.parse("main")
        assert symbol == ParsedSymbol(func_name="main")

    def test_empty_name(self, parser):
        """Test empty input yields an empty result."""
        assert parser.parse("") == ParsedSymbol()

    def test_unmatched_function_bracket(self, strict_parser):
        """Test a ']' without '[' aborts with an empty result."""
        symbol = strict_parser.parse("pkg.Func]")
        assert symbol.func_name == ""
        assert symbol.package_path == ""
        assert symbol.warnings == ["unmatched ']' in function generic arguments"]

    def test_receiver_without_dot_before_paren(self, strict_parser):
        """Test parenthesized receiver not preceded by '.' keeps only the function name."""
        symbol = strict_parser.parse("pkg(*T).M")
        assert symbol.func_name == "M"
        assert symbol.package_path == ""
        assert symbol.qualifier == ""
        assert symbol.warnings == ["malformed parenthesized receiver"]

    def test_default_parser_keeps_warnings_empty(self, parser):
        """Test abort reasons are only recorded in strict mode."""
        symbol = parser.parse("pkg.Func]")
        assert symbol.warnings == []

    def test_over_long_name_is_not_parsed(self):
        """Test max_length guards the parser."""
        parser = SymbolParser({'strict_mode': True, 'max_length': 8})
        symbol = parser.parse("pkg.(*T).Method")
        assert symbol.func_name == ""
        assert len(symbol.warnings) == 1

    def test_nested_function_generics(self, parser):
        """Test bracket matching honours nesting."""
        symbol = parser.parse("pkg.Map[map[string]int]")
        assert symbol.func_generic_args == "map[string]int"
        assert symbol.func_name == "Map"
        assert symbol.package_path == "pkg"

    def test_to_dict(self, parser):
        """Test JSON-ready dictionary form."""
        data = parser.parse("pkg.Outer.Inner.func1").to_dict()
        assert data["func_name"] == "Inner"
        assert data["notice_kinds"] == ["anonymous_closure"]
        assert data["warnings"] == []

    def test_parse_symbol_convenience(self):
        """Test module-level convenience function."""
        assert parse_symbol("os.File.Read").qualifier == "File"


@pytest.mark.parametrize("full_name,package_path,qualifier,pointer,type_generic,func_generic,func_name", [
    ("fmt.Printf", "fmt", "", False, "", "", "Printf"),
    ("os.File.Read", "os", "File", False, "", "", "Read"),
    ("os.(*File).Read", "os", "File", True, "", "", "Read"),
    ("github.com/xhd2015/xgo.(*File).Read", "github.com/xhd2015/xgo", "File", True, "", "", "Read"),
    ("github.com/xhd2015/xgo.1.(*File).Read", "github.com/xhd2015/xgo.1", "File", True, "", "", "Read"),
    ("github.com/xhd2015/xgo.(*File[int]).Read", "github.com/xhd2015/xgo", "File", True, "int", "", "Read"),
    ("github.com/xhd2015/xgo.(*File[int]).Read[string]", "github.com/xhd2015/xgo", "File", True, "int", "string", "Read"),
    ("github.com/xhd2015/xgo.Watch", "github.com/xhd2015/xgo", "", False, "", "", "Watch"),
    ("github.com/xhd2015/xgo.Watch[int]", "github.com/xhd2015/xgo", "", False, "", "int", "Watch"),
    ("gopkg.in/yaml.v3.(*Decoder).Decode", "gopkg.in/yaml.v3", "Decoder", True, "", "", "Decode"),
    ("modeledge-go/internal/routes.RegisterToolRoutes.FakeError.func1",
     "modeledge-go/internal/routes", "RegisterToolRoutes", False, "", "", "FakeError"),
])
def test_known_symbol_shapes(parser, full_name, package_path, qualifier, pointer,
                             type_generic, func_generic, func_name):
    """Test identifier shapes emitted by the runtime symbolizer."""
    symbol = parser.parse(full_name)
    assert symbol.package_path == package_path
    assert symbol.qualifier == qualifier
    assert symbol.receiver_is_pointer is pointer
    assert symbol.type_generic_args == type_generic
    assert symbol.func_generic_args == func_generic
    assert symbol.func_name == func_name
