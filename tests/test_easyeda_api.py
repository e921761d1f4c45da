import json
from unittest.mock import Mock, patch

import pytest
import requests

from adapters.easyeda.easyeda_api import API_ENDPOINT, MODEL_OBJ_ENDPOINT, EasyEDAApi
from errors import ApiError, MissingData


def _response(status_code=200, body=None, content=b""):
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.json.return_value = body
    mock_response.content = content
    return mock_response


@pytest.fixture
def cached_api(tmp_path):
    """An API client caching into a temporary directory."""
    return EasyEDAApi(cache_dir=tmp_path / "cache")


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_fetch_cad_data(mock_get, cad_data):
    mock_get.return_value = _response(body={"success": True, "result": cad_data})

    data = EasyEDAApi().get_component_cad_data("C25804")

    assert data == cad_data
    mock_get.assert_called_once()
    assert mock_get.call_args.kwargs["url"] == API_ENDPOINT.format(lcsc_id="C25804")
    assert "User-Agent" in mock_get.call_args.kwargs["headers"]


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_cad_data_is_cached(mock_get, cached_api, cad_data):
    """
    The first request hits the network and fills the cache, the second is
    served from disk.
    """
    mock_get.return_value = _response(body={"success": True, "result": cad_data})

    first = cached_api.get_component_cad_data("C25804")
    second = cached_api.get_component_cad_data("C25804")

    assert first == second == cad_data
    mock_get.assert_called_once()
    cache_file = cached_api._get_cache_path("cad_C25804", "json")
    assert json.loads(cache_file.read_text()) == cad_data


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_network_failure(mock_get):
    mock_get.side_effect = requests.exceptions.RequestException("Network error")

    with pytest.raises(ApiError):
        EasyEDAApi().get_component_cad_data("C25804")


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_http_error(mock_get):
    mock_get.return_value = _response(status_code=503)

    with pytest.raises(ApiError, match="HTTP 503"):
        EasyEDAApi().get_component_cad_data("C25804")


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_invalid_json(mock_get):
    mock_response = _response()
    mock_response.json.side_effect = ValueError("no json")
    mock_get.return_value = mock_response

    with pytest.raises(ApiError):
        EasyEDAApi().get_component_cad_data("C25804")


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_unknown_part(mock_get, cached_api):
    mock_get.return_value = _response(body={"success": False, "message": "Component not found"})

    with pytest.raises(MissingData, match="Component not found"):
        cached_api.get_component_cad_data("C0")
    # failures are not cached
    assert not cached_api._get_cache_path("cad_C0", "json").exists()


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_missing_result(mock_get):
    mock_get.return_value = _response(body={"success": True})

    with pytest.raises(MissingData, match="result"):
        EasyEDAApi().get_component_cad_data("C25804")


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_obj_model(mock_get, cached_api):
    mock_get.return_value = _response(content=b"v 1 2 3\n")

    assert cached_api.get_raw_3d_model_obj("8f3c2a9e") == "v 1 2 3\n"
    assert cached_api.get_raw_3d_model_obj("8f3c2a9e") == "v 1 2 3\n"
    mock_get.assert_called_once()
    assert mock_get.call_args.kwargs["url"] == MODEL_OBJ_ENDPOINT.format(uuid="8f3c2a9e")


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_missing_models_are_none(mock_get):
    mock_get.return_value = _response(status_code=404)
    api = EasyEDAApi()

    assert api.get_raw_3d_model_obj("8f3c2a9e") is None
    assert api.get_step_3d_model("8f3c2a9e") is None


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_model_network_failure_is_none(mock_get):
    mock_get.side_effect = requests.exceptions.ConnectionError("offline")

    assert EasyEDAApi().get_step_3d_model("8f3c2a9e") is None


@patch("adapters.easyeda.easyeda_api.requests.get")
def test_result_that_is_not_an_object(mock_get, cached_api):
    mock_get.return_value = _response(body={"success": True, "result": ["unexpected"]})

    with pytest.raises(MissingData, match="not an object"):
        cached_api.get_component_cad_data("C25804")
    assert not cached_api._get_cache_path("cad_C25804", "json").exists()
