"""Unit tests for lexical identifier resolution."""

from collections.abc import Callable

from helpers import find_identifier
from ngstrip.core.ast import ParsedSource, parse_source
from ngstrip.core.scopes import ScopeResolver

Parse = Callable[[str], ParsedSource]


def _resolve(parsed: ParsedSource, name: str) -> list[str]:
    resolver = ScopeResolver(parsed.root)
    return [node.type for node in resolver.resolve(find_identifier(parsed.root, name))]


class TestImports:
    def test_named_import_resolves_to_specifier(self, parse_js: Parse) -> None:
        parsed = parse_js("import { Component } from '@angular/core';\nuse(Component);\n")
        assert _resolve(parsed, "Component") == ["import_specifier"]

    def test_aliased_import_resolves_through_alias(self, parse_js: Parse) -> None:
        parsed = parse_js("import { Component as C } from '@angular/core';\nuse(C);\n")
        assert _resolve(parsed, "C") == ["import_specifier"]

    def test_default_import_is_not_a_specifier(self, parse_js: Parse) -> None:
        parsed = parse_js("import Component from 'lib';\nuse(Component);\n")
        assert _resolve(parsed, "Component") == ["identifier"]

    def test_namespace_import(self, parse_js: Parse) -> None:
        parsed = parse_js("import * as ng from '@angular/core';\nuse(ng);\n")
        assert _resolve(parsed, "ng") == ["namespace_import"]


class TestShadowing:
    def test_parameter_shadows_import(self, parse_js: Parse) -> None:
        parsed = parse_js(
            "import { Component } from '@angular/core';\nfunction f(Component) { return Component; }\n"
        )
        resolver = ScopeResolver(parsed.root)
        (declaration,) = resolver.resolve(find_identifier(parsed.root, "Component"))
        assert declaration.type == "identifier"
        assert declaration.parent is not None
        assert declaration.parent.type == "formal_parameters"

    def test_block_let_shadows_import(self, parse_js: Parse) -> None:
        parsed = parse_js("import { Component } from 'a';\n{ let Component = 1; use(Component); }\n")
        assert _resolve(parsed, "Component") == ["variable_declarator"]

    def test_same_scope_redeclaration_yields_every_declaration(self, parse_js: Parse) -> None:
        parsed = parse_js("import { Component } from 'a';\nvar Component = 1;\nuse(Component);\n")
        assert sorted(_resolve(parsed, "Component")) == ["import_specifier", "variable_declarator"]

    def test_catch_parameter(self, parse_js: Parse) -> None:
        parsed = parse_js("try { run(); } catch (err) { report(err); }\n")
        resolver = ScopeResolver(parsed.root)
        (declaration,) = resolver.resolve(find_identifier(parsed.root, "err"))
        assert declaration.parent is not None
        assert declaration.parent.type == "catch_clause"

    def test_arrow_function_single_parameter(self, parse_js: Parse) -> None:
        parsed = parse_js("const h = v => v;\n")
        resolver = ScopeResolver(parsed.root)
        (declaration,) = resolver.resolve(find_identifier(parsed.root, "v"))
        assert declaration.parent is not None
        assert declaration.parent.type == "arrow_function"


class TestVariableScopes:
    def test_var_is_function_scoped(self, parse_js: Parse) -> None:
        parsed = parse_js("function f(x) { if (x) { var A = 1; } return A; }\n")
        assert _resolve(parsed, "A") == ["variable_declarator"]

    def test_let_is_block_scoped(self, parse_js: Parse) -> None:
        parsed = parse_js("function f(x) { if (x) { let A = 1; } return A; }\n")
        assert _resolve(parsed, "A") == []

    def test_destructuring_patterns(self, parse_js: Parse) -> None:
        parsed = parse_js("const { a, b: [c = 1], ...rest } = obj;\nuse(a, c, rest);\n")
        assert _resolve(parsed, "a") == ["variable_declarator"]
        assert _resolve(parsed, "c") == ["variable_declarator"]
        assert _resolve(parsed, "rest") == ["variable_declarator"]

    def test_for_of_binding(self, parse_js: Parse) -> None:
        parsed = parse_js("for (const item of items) { use(item); }\n")
        assert _resolve(parsed, "item") == ["for_in_statement"]

    def test_for_let_binding_does_not_leak(self, parse_js: Parse) -> None:
        parsed = parse_js("for (let i = 0; i < 3; i++) {}\nuse(i);\n")
        assert _resolve(parsed, "i") == []

    def test_undeclared_global_is_unresolved(self, parse_js: Parse) -> None:
        parsed = parse_js("use(window);\n")
        assert _resolve(parsed, "window") == []


class TestDeclarations:
    def test_class_declaration(self, parse_js: Parse) -> None:
        parsed = parse_js("class Foo {}\nFoo.decorators = [];\n")
        assert _resolve(parsed, "Foo") == ["class_declaration"]

    def test_function_declaration_binds_in_enclosing_scope(self, parse_js: Parse) -> None:
        parsed = parse_js("function helper() {}\nhelper();\n")
        assert _resolve(parsed, "helper") == ["function_declaration"]

    def test_named_function_expression_binds_inside_only(self, parse_js: Parse) -> None:
        parsed = parse_js("const g = function inner() { return inner; };\n")
        assert _resolve(parsed, "inner")[0] in ("function_expression", "function")

        outside = parse_js("const g = function inner() {};\nuse(inner);\n")
        assert _resolve(outside, "inner") == []

    def test_typescript_constructor_parameters(self) -> None:
        parsed = parse_source(
            "class Svc {\n  constructor(private readonly http: Client) { use(http); }\n}\n",
            "typescript",
        )
        resolver = ScopeResolver(parsed.root)
        (declaration,) = resolver.resolve(find_identifier(parsed.root, "http"))
        assert declaration.type == "identifier"

    def test_declarations_lists_scope_bindings(self, parse_js: Parse) -> None:
        parsed = parse_js("import { A } from 'a';\nconst b = 1;\nfunction c() {}\n")
        names = ScopeResolver(parsed.root).declarations(parsed.root)
        assert set(names) == {"A", "b", "c"}
