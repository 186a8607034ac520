"""
Unit tests for the ModelLoadRouter.

Tests routing in isolation using mock backends.
"""

import pytest

from graphloader.core.locator import JsonLocator
from graphloader.core.router import (
    ModelLoadRouter,
    get_router,
    load_graph_model,
    load_tfhub_module,
)
from graphloader.inference.backends import (
    BinaryGraphBackend,
    JsonGraphBackend,
    MockBackend,
    TFHubBackend,
)
from graphloader.models.options import LoadOptions, RequestOptions


class TestLoadGraphModelRouting:
    """Tests that each request reaches exactly one backend."""

    def test_plain_url_goes_to_json_backend(
        self,
        router: ModelLoadRouter,
        binary_backend: MockBackend,
        json_backend: MockBackend,
        tfhub_backend: MockBackend,
    ) -> None:
        """Test a URL without .pb and without from_tfhub is passed unchanged."""
        result = router.load_graph_model("https://host/mobilenet/model.json")

        assert result == "json-model"
        assert json_backend.calls == [("https://host/mobilenet/model.json", None, None)]
        assert not binary_backend.called
        assert not tfhub_backend.called

    def test_pb_url_goes_to_binary_backend(
        self,
        router: ModelLoadRouter,
        binary_backend: MockBackend,
        json_backend: MockBackend,
    ) -> None:
        """Test a .pb URL reaches the binary backend with a derived manifest."""
        result = router.load_graph_model("https://host/dir/tensorflowjs_model.pb")

        assert result == "binary-model"
        assert binary_backend.calls == [(
            "https://host/dir/tensorflowjs_model.pb",
            "https://host/dir/weights_manifest.json",
            None,
            None,
        )]
        assert not json_backend.called

    @pytest.mark.parametrize(
        "url",
        ["https://tfhub.dev/google/m/2", "https://host/m.pb", "https://host/model.json"],
    )
    def test_tfhub_flag_goes_to_tfhub_backend(
        self,
        router: ModelLoadRouter,
        binary_backend: MockBackend,
        json_backend: MockBackend,
        tfhub_backend: MockBackend,
        url: str,
    ) -> None:
        """Test from_tfhub forces TF-Hub routing regardless of suffix."""
        result = router.load_graph_model(url, LoadOptions(from_tfhub=True))

        assert result == "tfhub-model"
        assert tfhub_backend.calls == [(url, None, None)]
        assert not binary_backend.called
        assert not json_backend.called

    def test_handler_goes_to_json_backend(
        self,
        router: ModelLoadRouter,
        json_backend: MockBackend,
    ) -> None:
        """Test a load handler is forwarded without inspection."""
        handler = object()

        router.load_graph_model(handler)

        assert json_backend.calls[0][0] is handler

    def test_options_passed_through(
        self,
        router: ModelLoadRouter,
        json_backend: MockBackend,
    ) -> None:
        """Test request options and progress callback reach the backend verbatim."""
        request_options = RequestOptions(headers={"Authorization": "Bearer t"})

        def on_progress(fraction: float) -> None:
            pass

        router.load_graph_model(
            "https://host/model.json",
            LoadOptions(request_options=request_options, progress_callback=on_progress),
        )

        _, passed_options, passed_callback = json_backend.calls[0]
        assert passed_options is request_options
        assert passed_callback is on_progress

    def test_dict_options_with_camel_case_keys(
        self,
        router: ModelLoadRouter,
        tfhub_backend: MockBackend,
    ) -> None:
        """Test a dict of options is accepted."""
        router.load_graph_model(
            "https://tfhub.dev/google/m/2",
            {"fromTFHub": True, "requestInit": {"headers": {"X-Key": "v"}}},
        )

        _, passed_options, _ = tfhub_backend.calls[0]
        assert passed_options.headers == {"X-Key": "v"}

    def test_request_init_credentials_mode(
        self,
        router: ModelLoadRouter,
        json_backend: MockBackend,
    ) -> None:
        """Test a fetch-style credentials mode under requestInit is accepted."""
        result = router.load_graph_model(
            "https://host/model.json",
            {"requestInit": {"credentials": "include"}},
        )

        assert result == "json-model"
        _, passed_options, _ = json_backend.calls[0]
        assert passed_options.credentials == "include"

    def test_none_options_treated_as_empty(
        self,
        router: ModelLoadRouter,
        json_backend: MockBackend,
    ) -> None:
        """Test options=None behaves like no options."""
        router.load_graph_model("https://host/model.json", None)

        assert json_backend.calls == [("https://host/model.json", None, None)]

    def test_each_call_routes_again(
        self,
        router: ModelLoadRouter,
        json_backend: MockBackend,
    ) -> None:
        """Test results are not cached across calls."""
        router.load_graph_model("https://host/model.json")
        router.load_graph_model("https://host/model.json")

        assert len(json_backend.calls) == 2


class TestLoadGraphModelErrors:
    """Tests for failure semantics."""

    def test_none_locator_raises_before_backend(
        self,
        router: ModelLoadRouter,
        binary_backend: MockBackend,
        json_backend: MockBackend,
        tfhub_backend: MockBackend,
    ) -> None:
        """Test a None locator raises ValueError and calls no backend."""
        with pytest.raises(ValueError, match="cannot be None"):
            router.load_graph_model(None)

        assert not binary_backend.called
        assert not json_backend.called
        assert not tfhub_backend.called

    def test_handler_with_tfhub_raises(
        self,
        router: ModelLoadRouter,
        tfhub_backend: MockBackend,
    ) -> None:
        """Test from_tfhub with a handler object is rejected."""
        with pytest.raises(ValueError):
            router.load_graph_model(object(), {"from_tfhub": True})

        assert not tfhub_backend.called

    @pytest.mark.parametrize(
        "url, backend_name",
        [
            ("https://host/model.json", "json_backend"),
            ("https://host/model.pb", "binary_backend"),
        ],
    )
    def test_backend_error_propagates_unchanged(self, url: str, backend_name: str) -> None:
        """Test backend exceptions reach the caller as the same object."""
        error = ConnectionError("connection reset")
        failing = MockBackend(error=error)
        router = ModelLoadRouter(**{backend_name: failing})

        with pytest.raises(ConnectionError) as exc_info:
            router.load_graph_model(url)

        assert exc_info.value is error
        assert len(failing.calls) == 1

    def test_unknown_locator_kind(self, router: ModelLoadRouter) -> None:
        """Test route rejects objects that are not locator kinds."""
        with pytest.raises(TypeError):
            router.route("https://host/model.json")


class TestRouterDefaults:
    """Tests for default wiring."""

    def test_default_backends(self) -> None:
        """Test the router builds real backends when none are injected."""
        router = ModelLoadRouter()

        assert isinstance(router.binary_backend, BinaryGraphBackend)
        assert isinstance(router.json_backend, JsonGraphBackend)
        assert isinstance(router.tfhub_backend, TFHubBackend)

    def test_route_accepts_classified_locator(
        self,
        router: ModelLoadRouter,
        json_backend: MockBackend,
    ) -> None:
        """Test route dispatches an already classified locator."""
        router.route(JsonLocator("https://host/model.json"))

        assert json_backend.calls == [("https://host/model.json", None, None)]

    def test_module_function_uses_default_router(
        self,
        default_router: ModelLoadRouter,
        json_backend: MockBackend,
    ) -> None:
        """Test load_graph_model delegates to the process-wide router."""
        assert get_router() is default_router

        assert load_graph_model("https://host/model.json") == "json-model"
        assert json_backend.called

    def test_load_tfhub_module_uses_default_router(
        self,
        default_router: ModelLoadRouter,
        tfhub_backend: MockBackend,
        json_backend: MockBackend,
    ) -> None:
        """Test load_tfhub_module goes straight to the TF-Hub backend."""
        assert load_tfhub_module("https://tfhub.dev/google/m/2") == "tfhub-model"

        assert tfhub_backend.calls == [("https://tfhub.dev/google/m/2", None, None)]
        assert not json_backend.called
