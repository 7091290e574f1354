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

"""Tests for viewservice.service.engine."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from viewservice import config
from viewservice.exceptions import ConfigurationError
from viewservice.service import ComposerBinding, View, ViewService

FIXTURES = Path(__file__).parent / "fixtures"
VIEWS = FIXTURES / "views"
EXTRA_VIEWS = FIXTURES / "extra-views"
VENDOR_VIEWS = FIXTURES / "vendor-views"


class NameComposer:
    def compose(self, view):
        view.with_data("name", "Composer")


class TestConstruction:
    def test_empty_view_paths_rejected(self, cache_dir):
        with pytest.raises(ConfigurationError):
            ViewService([], str(cache_dir))

    def test_cache_dir_created(self, cache_dir):
        service = ViewService([str(VIEWS)], str(cache_dir))
        assert cache_dir.is_dir()
        assert service.get_cache_path() == str(cache_dir)

    def test_uncreatable_cache_path(self, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("not a directory")
        bad = blocker / "cache"
        with pytest.raises(ConfigurationError, match="could not be created") as exc_info:
            ViewService([str(VIEWS)], str(bad))
        assert str(bad) in str(exc_info.value)

    def test_non_writable_cache_dir(self, cache_dir, monkeypatch):
        cache_dir.mkdir()
        monkeypatch.setattr(config.os, "access", lambda path, mode: False)
        with pytest.raises(ConfigurationError, match="is not a directory or is not writable") as exc_info:
            ViewService([str(VIEWS)], str(cache_dir))
        assert str(cache_dir) in str(exc_info.value)

    def test_accessors(self, service):
        assert service.get_view_paths() == [str(VIEWS)]
        assert service.get_file_extensions() == ["html.j2"]

    def test_view_paths_returned_as_copy(self, service):
        service.get_view_paths().append("/elsewhere")
        assert service.get_view_paths() == [str(VIEWS)]


class TestRendering:
    def test_basic_view(self, service):
        assert service.make_view("basic").render().strip() == "Hello World!"

    def test_variables(self, service):
        output = service.make_view("variables", {"name": "John Doe"}).render()
        assert output.strip() == "Hello John Doe!"

    def test_data_overrides_merge_data(self, service):
        output = service.render("variables", {"name": "Data"}, {"name": "Merge"})
        assert output.strip() == "Hello Data!"

    def test_merge_data_used_when_missing_from_data(self, service):
        output = service.render("variables", merge_data={"name": "Merge"})
        assert output.strip() == "Hello Merge!"

    def test_output_is_escaped(self, service):
        output = service.render("variables", {"name": "<b>x</b>"})
        assert "&lt;b&gt;x&lt;/b&gt;" in output

    def test_make_view_returns_view(self, service):
        view = service.make_view("alias.source", {"name": "x"})
        assert isinstance(view, View)
        assert view.name == "alias.source"
        assert view.path == str(VIEWS / "alias" / "source.html.j2")
        assert str(view).strip() == "Hello x!"

    def test_missing_view_raises(self, service):
        with pytest.raises(TemplateNotFound, match=r"View \[nonexistent\] not found"):
            service.make_view("nonexistent")

    def test_shared_data(self, service):
        service.share("site", "Example")
        service.share({"title": "Shared title"})
        assert service.render("shared").strip() == "Example: Shared title"
        assert service.render("shared", {"title": "Own"}).strip() == "Example: Own"

    def test_compiled_views_written_to_cache(self, service, cache_dir):
        service.render("basic")
        assert list(cache_dir.glob("__view_*.cache"))


class TestTransientViewPaths:
    def test_view_found_only_for_that_call(self, service):
        output = service.make_view("extra", view_path=str(EXTRA_VIEWS)).render()
        assert output.strip() == "Hello Extra!"

        with pytest.raises(TemplateNotFound):
            service.make_view("extra")
        assert service.get_view_paths() == [str(VIEWS)]

    def test_transient_paths_take_precedence(self, service):
        output = service.render("basic", view_path=[str(EXTRA_VIEWS)])
        assert output.strip() == "Shadowed basic"
        assert service.render("basic").strip() == "Hello World!"

    def test_several_transient_paths_keep_order(self, service):
        output = service.render("basic", view_path=[str(EXTRA_VIEWS), str(VENDOR_VIEWS)])
        assert output.strip() == "Shadowed basic"
        assert service.render("welcome", view_path=[str(EXTRA_VIEWS), str(VENDOR_VIEWS)]).strip() == "Vendor welcome"

    def test_transient_file_extension(self, tmp_path, service):
        (tmp_path / "plain.txt").write_text("plain {{ x }}")
        view = service.make_view("plain", {"x": 1}, view_path=tmp_path, file_extensions=["txt"])
        assert view.render() == "plain 1"
        assert service.get_file_extensions() == ["html.j2"]


class TestViewPaths:
    def test_add_view_path(self, service):
        service.add_view_path(str(EXTRA_VIEWS))
        assert service.render("extra").strip() == "Hello Extra!"
        assert service.get_view_paths() == [str(VIEWS), str(EXTRA_VIEWS)]

    def test_appended_path_has_lowest_precedence(self, service):
        service.add_view_path(str(EXTRA_VIEWS))
        assert service.render("basic").strip() == "Hello World!"

    def test_prepend_view_path(self, service):
        service.add_view_path(str(EXTRA_VIEWS), prepend=True)
        assert service.get_view_paths()[0] == str(EXTRA_VIEWS)
        assert service.render("basic").strip() == "Shadowed basic"

    def test_prepend_after_render_takes_effect(self, service):
        assert service.render("basic").strip() == "Hello World!"
        service.add_view_path(str(EXTRA_VIEWS), prepend=True)
        assert service.render("basic").strip() == "Shadowed basic"

    def test_add_view_paths_append(self, service):
        service.add_view_paths([str(EXTRA_VIEWS), str(VENDOR_VIEWS)])
        assert service.get_view_paths() == [str(VIEWS), str(EXTRA_VIEWS), str(VENDOR_VIEWS)]

    def test_add_view_paths_prepend_keeps_order(self, service):
        service.add_view_paths([str(EXTRA_VIEWS), str(VENDOR_VIEWS)], prepend=True)
        assert service.get_view_paths() == [str(EXTRA_VIEWS), str(VENDOR_VIEWS), str(VIEWS)]

    def test_duplicates_allowed(self, service):
        service.add_view_path(str(VIEWS))
        assert service.get_view_paths() == [str(VIEWS), str(VIEWS)]

    def test_namespace(self, service):
        service.add_namespace("vendor", VENDOR_VIEWS)
        assert service.render("vendor::welcome").strip() == "Vendor welcome"
        with pytest.raises(TemplateNotFound):
            service.render("welcome")

    def test_unknown_namespace(self, service):
        with pytest.raises(TemplateNotFound, match="No hint path"):
            service.render("nope::welcome")


class TestDirectives:
    def test_directive(self, service):
        service.register_directive(
            "datetime", lambda expr: "{{ (%s).strftime('%%B %%d, %%Y') }}" % expr,
        )
        output = service.render("directive", {"birthday": date(1983, 9, 28)})
        assert output.strip() == "Your birthday is September 28, 1983"

    def test_last_registration_wins(self, service):
        service.register_directive("datetime", lambda expr: "first")
        service.register_directive("datetime", lambda expr: "second")
        assert service.render("directive", {"birthday": None}).strip() == "Your birthday is second"

    def test_reregistering_recompiles_loaded_view(self, service):
        service.register_directive("datetime", lambda expr: "first")
        assert "first" in service.render("directive")
        service.register_directive("datetime", lambda expr: "{{ %s.year }}" % expr)
        assert service.render("directive", {"birthday": date(2000, 1, 1)}).strip() == "Your birthday is 2000"

    def test_unregistered_and_escaped_left_alone(self, service):
        service.register_directive("datetime", lambda expr: "EXPANDED")
        output = service.render("untouched")
        assert "support@example.com" in output
        assert "@unknown stays" in output
        assert "@datetime is literal" in output
        assert "EXPANDED" not in output

    def test_services_sharing_cache_use_own_handlers(self, cache_dir):
        first = ViewService([str(VIEWS)], str(cache_dir))
        first.register_directive("datetime", lambda expr: "FIRST")
        assert first.render("directive").strip() == "Your birthday is FIRST"

        second = ViewService([str(VIEWS)], str(cache_dir))
        second.register_directive("datetime", lambda expr: "SECOND")
        assert second.render("directive").strip() == "Your birthday is SECOND"
        assert first.render("directive").strip() == "Your birthday is FIRST"

    def test_get_directives(self, service):
        handler = lambda expr: ""  # noqa: E731
        service.register_directive("noop", handler)
        assert service.get_directives() == {"noop": handler}


class TestComponents:
    def test_composer(self, service):
        service.register_component("variables", lambda view: view.with_data("name", "John Doe"))
        assert service.render("variables").strip() == "Hello John Doe!"

    def test_register_component_returns_bindings(self, service):
        callback = lambda view: None  # noqa: E731
        bindings = service.register_component(["basic", "alias.*"], callback)
        assert bindings == [
            ComposerBinding("basic", callback),
            ComposerBinding("alias.*", callback),
        ]

    def test_wildcard_composer(self, service):
        service.register_component("alias.*", lambda view: view.with_data({"name": "Pattern"}))
        assert service.render("alias.source").strip() == "Hello Pattern!"

    def test_composer_by_import_string(self, service):
        service.register_component("variables", f"{__name__}:NameComposer")
        assert service.render("variables").strip() == "Hello Composer!"

    def test_component_directive(self, service):
        service.register_component_directive("alias.source", "sayHello")
        service.register_component("alias.source", lambda view: view.with_data("name", "World"))
        assert service.render("alias.usage").strip() == "Hello World!"

    def test_component_directive_registers_both_tags(self, service):
        service.register_component_directive("alias.source", "sayHello")
        assert set(service.get_directives()) == {"sayHello", "endsayHello"}

    def test_component_with_data_and_slot(self, service):
        service.register_component_directive("components.card", "card")
        output = service.render("card_usage")
        assert output.strip() == '<div class="card"><h3>Note</h3><p>Body & text</p></div>'
