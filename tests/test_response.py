from __future__ import annotations

from typing import Any

import pytest
from litestar import MediaType
from litestar.exceptions import ImproperlyConfiguredException, SerializationException
from litestar.serialization import decode_json
from litestar.testing import RequestFactory

from litestar_inertia import InertiaHeaders
from litestar_inertia.context import request_context
from litestar_inertia.exceptions import NoRequestContextError
from litestar_inertia.helpers import lazy
from litestar_inertia.response import Inertia, InertiaExternalRedirect
from litestar_inertia.version import AssetVersion
from tests.helpers import RecordingEncoder, RecordingTemplateEngine

INERTIA = {InertiaHeaders.ENABLED.value: "true"}


def make_inertia(template_engine: RecordingTemplateEngine | None = None, version: str | None = None) -> Inertia:
    return Inertia(
        template_engine or RecordingTemplateEngine(),
        root_template="inertia.html",
        version=AssetVersion(version),
    )


def page_of(response: Any) -> dict[str, Any]:
    return decode_json(response.content)


def test_full_page_response_renders_html(template_engine: RecordingTemplateEngine) -> None:
    inertia = make_inertia(template_engine)

    with request_context(RequestFactory().get("/home")):
        response = inertia.render("Home", {"name": "Alice"})

    assert response.status_code == 200
    assert response.media_type == MediaType.HTML
    assert response.content == template_engine.output
    assert InertiaHeaders.ENABLED.value not in response.headers
    assert len(template_engine.calls) == 1
    template_name, context = template_engine.calls[0]
    assert template_name == "inertia.html"
    assert list(context) == ["page"]
    assert context["page"] == {"component": "Home", "props": {"name": "Alice"}, "url": "/home", "version": ""}


def test_full_page_response_without_template_engine() -> None:
    inertia = Inertia(None)

    with request_context(RequestFactory().get("/")), pytest.raises(ImproperlyConfiguredException):
        inertia.render("Home")


def test_inertia_response_returns_json(template_engine: RecordingTemplateEngine) -> None:
    inertia = make_inertia(template_engine, version="1")

    with request_context(RequestFactory().get("/home", headers=INERTIA)):
        response = inertia.render("Home", {"foo": "bar"})

    assert response.status_code == 200
    assert response.media_type == MediaType.JSON
    assert response.headers[InertiaHeaders.ENABLED.value] == "true"
    assert response.headers["Vary"] == InertiaHeaders.ENABLED.value
    assert response.content == b'{"component":"Home","props":{"foo":"bar"},"url":"/home","version":"1"}'
    assert template_engine.calls == []


def test_inertia_response_includes_query_string() -> None:
    with request_context(RequestFactory().get("/dashboard", headers=INERTIA, query_params={"tab": "stats"})):
        response = make_inertia().render("Dashboard")

    assert page_of(response)["url"] == "/dashboard?tab=stats"


def test_inertia_response_version_is_empty_string_when_unset() -> None:
    with request_context(RequestFactory().get("/", headers=INERTIA)):
        response = make_inertia(version=None).render("Home")

    assert page_of(response)["version"] == ""


def test_version_override_is_used_by_later_renders() -> None:
    inertia = make_inertia(version="v1")
    inertia.set_version("v2")

    with request_context(RequestFactory().get("/", headers=INERTIA)):
        response = inertia.render("Home")

    assert inertia.get_version() == "v2"
    assert page_of(response)["version"] == "v2"


def test_shared_props_are_merged_with_component_props() -> None:
    inertia = make_inertia()

    with request_context(RequestFactory().get("/", headers=INERTIA)):
        inertia.share("user", "Bob")
        response = inertia.render("Home", {"title": "Hello"})

    assert page_of(response)["props"] == {"user": "Bob", "title": "Hello"}


def test_component_props_override_shared_props() -> None:
    inertia = make_inertia()

    with request_context(RequestFactory().get("/", headers=INERTIA)):
        inertia.share({"first": 1, "key": "shared"})
        inertia.share("last", 3)
        response = inertia.render("Home", {"extra": 4, "key": "component"})

    assert response.content == (
        b'{"component":"Home","props":{"first":1,"key":"component","last":3,"extra":4},"url":"/","version":""}'
    )


def test_render_does_not_mutate_shared_props() -> None:
    inertia = make_inertia()

    with request_context(RequestFactory().get("/", headers=INERTIA)):
        inertia.share("key", "shared")
        inertia.render("Home", {"key": "component", "other": lazy(lambda: "value")})

        assert inertia.get_shared_props() == {"key": "shared"}


def test_deferred_props_are_resolved_on_render() -> None:
    calls: list[str] = []

    def load() -> str:
        calls.append("lazy")
        return "resolved"

    with request_context(RequestFactory().get("/", headers=INERTIA)):
        response = make_inertia().render("Home", {"lazy": lazy(load)})

    assert calls == ["lazy"]
    assert page_of(response)["props"]["lazy"] == "resolved"


def test_shared_deferred_props_are_resolved_in_full_page_render(template_engine: RecordingTemplateEngine) -> None:
    inertia = make_inertia(template_engine)

    with request_context(RequestFactory().get("/")):
        inertia.share("auth", lazy(lambda: {"user": "nobody"}))
        inertia.render("Home")

    assert template_engine.calls[0][1]["page"]["props"] == {"auth": {"user": "nobody"}}


def test_partial_reload_only_includes_requested_props() -> None:
    headers = {
        **INERTIA,
        InertiaHeaders.PARTIAL_COMPONENT.value: "Home",
        InertiaHeaders.PARTIAL_DATA.value: "title",
    }

    with request_context(RequestFactory().get("/", headers=headers)):
        response = make_inertia().render("Home", {"title": "Hello", "secret": "hidden"})

    props = page_of(response)["props"]
    assert "title" in props
    assert "secret" not in props


def test_partial_reload_with_multiple_keys_drops_shared_props() -> None:
    headers = {
        **INERTIA,
        InertiaHeaders.PARTIAL_COMPONENT.value: "Home",
        InertiaHeaders.PARTIAL_DATA.value: "title, user",
    }
    inertia = make_inertia()

    with request_context(RequestFactory().get("/", headers=headers)):
        inertia.share({"user": "Alice", "flash": "saved"})
        response = inertia.render("Home", {"title": "Hello", "other": "nope"})

    assert page_of(response)["props"] == {"user": "Alice", "title": "Hello"}


def test_partial_reload_skips_unselected_deferred_props() -> None:
    calls: list[str] = []

    def expensive() -> str:  # pragma: no cover
        calls.append("expensive")
        return "never"

    headers = {
        **INERTIA,
        InertiaHeaders.PARTIAL_COMPONENT.value: "Home",
        InertiaHeaders.PARTIAL_DATA.value: "lazy",
    }

    with request_context(RequestFactory().get("/", headers=headers)):
        response = make_inertia().render("Home", {"lazy": lazy(lambda: "resolved"), "expensive": lazy(expensive)})

    assert page_of(response)["props"] == {"lazy": "resolved"}
    assert calls == []


def test_partial_reload_ignored_for_different_component() -> None:
    headers = {
        **INERTIA,
        InertiaHeaders.PARTIAL_COMPONENT.value: "Other",
        InertiaHeaders.PARTIAL_DATA.value: "title",
    }

    with request_context(RequestFactory().get("/", headers=headers)):
        response = make_inertia().render("Home", {"title": "Hello", "secret": "included"})

    assert page_of(response)["props"] == {"title": "Hello", "secret": "included"}


@pytest.mark.parametrize("partial_data", ["", " , "])
def test_partial_reload_without_keys_includes_everything(partial_data: str) -> None:
    headers = {
        **INERTIA,
        InertiaHeaders.PARTIAL_COMPONENT.value: "Home",
        InertiaHeaders.PARTIAL_DATA.value: partial_data,
    }

    with request_context(RequestFactory().get("/", headers=headers)):
        response = make_inertia().render("Home", {"title": "Hello", "secret": lazy(lambda: "included")})

    assert page_of(response)["props"] == {"title": "Hello", "secret": "included"}


def test_partial_reload_also_filters_full_page_visits(template_engine: RecordingTemplateEngine) -> None:
    headers = {
        InertiaHeaders.PARTIAL_COMPONENT.value: "Home",
        InertiaHeaders.PARTIAL_DATA.value: "title",
    }

    with request_context(RequestFactory().get("/", headers=headers)):
        make_inertia(template_engine).render("Home", {"title": "Hello", "secret": "hidden"})

    assert template_engine.calls[0][1]["page"]["props"] == {"title": "Hello"}


def test_render_outside_request_context_fails_before_any_io(template_engine: RecordingTemplateEngine) -> None:
    encoder = RecordingEncoder()
    inertia = Inertia(template_engine, encoder=encoder)
    calls: list[str] = []

    with pytest.raises(NoRequestContextError):
        inertia.render("Home", {"lazy": lazy(lambda: calls.append("lazy"))})

    assert template_engine.calls == []
    assert encoder.calls == 0
    assert calls == []


def test_share_outside_request_context_fails() -> None:
    with pytest.raises(NoRequestContextError):
        make_inertia().share("key", "value")


def test_unserializable_prop_raises_encoding_error() -> None:
    with request_context(RequestFactory().get("/", headers=INERTIA)), pytest.raises(SerializationException):
        make_inertia().render("Home", {"ok": "value", "bad": object()})


def test_plain_callables_are_not_deferred_props() -> None:
    with request_context(RequestFactory().get("/", headers=INERTIA)), pytest.raises(SerializationException):
        make_inertia().render("Home", {"callback": lambda: "value"})


def test_template_errors_propagate() -> None:
    class BrokenTemplateEngine(RecordingTemplateEngine):
        def render(self, template_name: str, context: Any) -> str:
            raise LookupError(template_name)

    with request_context(RequestFactory().get("/")), pytest.raises(LookupError, match="inertia.html"):
        make_inertia(BrokenTemplateEngine()).render("Home")


def test_custom_encoder_is_used() -> None:
    encoder = RecordingEncoder()
    inertia = Inertia(RecordingTemplateEngine(), encoder=encoder)

    with request_context(RequestFactory().get("/", headers=INERTIA)):
        inertia.render("Home")

    assert encoder.calls == 1


def test_external_redirect() -> None:
    response = InertiaExternalRedirect("https://example.com/login?next=/home")

    assert response.status_code == 409
    assert response.content == b""
    assert response.headers[InertiaHeaders.LOCATION.value] == "https://example.com/login?next=/home"
