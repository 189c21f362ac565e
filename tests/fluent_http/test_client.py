"""Tests for client construction, verbs and resource ownership."""

from __future__ import annotations

import pytest

from packages.fluent_http import (
    Client,
    ClientSettings,
    EntityMapper,
    FluentHttpSettings,
    HttpMethod,
    HttpxTransport,
    TransportSettings,
)
from tests.fluent_http.helpers import FakeTransport


@pytest.mark.parametrize(
    ("verb", "method"),
    [
        ("get", HttpMethod.GET),
        ("post", HttpMethod.POST),
        ("put", HttpMethod.PUT),
        ("head", HttpMethod.HEAD),
        ("delete", HttpMethod.DELETE),
        ("patch", HttpMethod.PATCH),
    ],
)
def test_verb_methods_seed_builder_method(verb: str, method: HttpMethod) -> None:
    """Each verb method should create a builder for that HTTP method."""
    transport = FakeTransport()
    client = (
        Client.builder()
        .with_base_url("http://a.test")
        .with_transport(transport)
        .build()
    )

    getattr(client, verb)("/x").execute()

    assert transport.requests[0].method is method
    assert transport.requests[0].url == "http://a.test/x"


def test_build_freezes_settings() -> None:
    """ClientBuilder.build should snapshot decorators into immutable settings."""
    mapper = EntityMapper()
    builder = (
        Client.builder()
        .with_entity_mapper(mapper)
        .with_decorator(lambda b: None)
        .with_transport(FakeTransport())
    )

    client = builder.build()
    builder.with_decorator(lambda b: None)

    assert isinstance(client.settings, ClientSettings)
    assert len(client.settings.decorators) == 1
    assert client.mapper is mapper
    with pytest.raises(AttributeError):
        client.settings.base_url = "http://other.test"  # type: ignore[misc]


def test_client_without_mapper_exposes_none() -> None:
    """A client built without a mapper has no default mapper."""
    client = Client.builder().with_transport(FakeTransport()).build()

    assert client.mapper is None
    assert client.get("http://a.test/x").mapper is None


def test_none_decorator_is_rejected() -> None:
    """with_decorator should reject None."""
    with pytest.raises(TypeError):
        Client.builder().with_decorator(None)  # type: ignore[arg-type]


def test_none_url_is_rejected() -> None:
    """Verb methods should reject a None URL."""
    client = Client.builder().with_transport(FakeTransport()).build()

    with pytest.raises(TypeError):
        client.get(None)  # type: ignore[arg-type]


def test_injected_transport_is_not_closed_by_client() -> None:
    """A transport supplied through the builder stays owned by the caller."""
    transport = FakeTransport()

    with Client.builder().with_transport(transport).build():
        pass

    assert transport.closed is False


def test_default_transport_is_closed_by_client() -> None:
    """A client-created transport is closed with the client."""
    client = Client.builder().build()

    assert isinstance(client._transport, HttpxTransport)
    client.close()
    assert client._transport._client.is_closed is True


def test_from_settings_applies_base_url_and_transport_options() -> None:
    """from_settings should normalize the base URL and own its transport."""
    settings = FluentHttpSettings.model_validate(
        {
            "base_url": "https://api.test/v1/",
            "transport": TransportSettings(timeout_seconds=2.5, user_agent="demo/1"),
        }
    )
    mapper = EntityMapper.with_defaults()

    with Client.from_settings(settings, entity_mapper=mapper) as client:
        transport = client._transport
        assert client.settings.base_url == "https://api.test/v1"
        assert client.mapper is mapper
        assert isinstance(transport, HttpxTransport)
        assert transport._client.timeout.read == 2.5
        assert transport._client.headers["User-Agent"] == "demo/1"
        assert client.get("/ping").url == "https://api.test/v1/ping"

    assert transport._client.is_closed is True
