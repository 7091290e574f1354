# viewservice — Jinja2 view rendering service for server-side HTML
# Copyright (C) 2026 The viewservice contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Tests for viewservice.service.directives."""

from __future__ import annotations

from viewservice.service.directives import compile_directives


def _echo(expression):
    return f"<{expression}>"


def test_no_at_sign_returns_source_unchanged():
    source = "plain {{ text }}"
    assert compile_directives(source, {"x": _echo}) is source


def test_directive_without_parentheses():
    assert compile_directives("a @x b", {"x": _echo}) == "a <None> b"


def test_directive_with_expression():
    assert compile_directives("@x(user.name)", {"x": _echo}) == "<user.name>"


def test_whitespace_before_parentheses():
    assert compile_directives("@x  (1)", {"x": _echo}) == "<1>"


def test_nested_parentheses():
    assert compile_directives("@x(f(a, (b)))!", {"x": _echo}) == "<f(a, (b))>!"


def test_parentheses_inside_strings():
    assert compile_directives('@x(")" ~ name)', {"x": _echo}) == '<")" ~ name>'


def test_unbalanced_parentheses_treated_as_bare():
    assert compile_directives("@x(oops", {"x": _echo}) == "<None>(oops"


def test_unregistered_directive_untouched():
    assert compile_directives("@y(1) @x", {"x": _echo}) == "@y(1) <None>"


def test_escaped_directive():
    assert compile_directives("@@x(1)", {"x": _echo}) == "@x(1)"


def test_email_address_untouched():
    assert compile_directives("me@x.org", {"x": _echo}) == "me@x.org"


def test_longer_name_not_matched_by_prefix():
    handlers = {"x": _echo, "endx": lambda expr: "END"}
    assert compile_directives("@x @endx @xy", handlers) == "<None> END @xy"
