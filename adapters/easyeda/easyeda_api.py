import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import requests

import constants as const
from errors import ApiError, MissingData

logger = logging.getLogger(__name__)

API_ENDPOINT = "https://easyeda.com/api/products/{lcsc_id}/components?version=6.4.19.5"
MODEL_OBJ_ENDPOINT = "https://modules.easyeda.com/3dmodel/{uuid}"
MODEL_STEP_ENDPOINT = "https://modules.easyeda.com/qAxj6KHrDKw4blvCG8QJPs7Y/{uuid}"


class EasyEDAApi:
    """Client for the EasyEDA component and 3D model endpoints.

    When ``cache_dir`` is given, every successful response is stored there and
    served from disk on the next request.
    """

    def __init__(self, cache_dir: Optional[Path] = None) -> None:
        self.headers = {
            "Accept-Encoding": "gzip, deflate",
            "Accept": "application/json, text/javascript, */*; q=0.01",
            "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
            "User-Agent": const.USER_AGENT,
        }
        self.cache_dir = cache_dir
        if self.cache_dir is not None:
            self.cache_dir.mkdir(parents=True, exist_ok=True)

    # --- Cache ---

    def _get_cache_path(self, name: str, extension: str) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        return self.cache_dir / f"{name}.{extension}"

    def _load_from_cache(self, path: Optional[Path]) -> Optional[bytes]:
        if path is not None and path.exists():
            logger.debug(f"Cache hit: {path}")
            return path.read_bytes()
        return None

    def _save_to_cache(self, path: Optional[Path], data: bytes):
        if path is not None:
            path.write_bytes(data)

    # --- Requests ---

    def _get(self, url: str) -> requests.Response:
        try:
            return requests.get(url=url, headers=self.headers, timeout=const.REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise ApiError(f"Request failed: {e}", {"url": url}) from e

    def get_component_cad_data(self, lcsc_id: str) -> Dict[str, Any]:
        """
        Fetch the CAD payload (symbol, footprint, metadata) of one component.

        Raises:
            ApiError: Network failure, HTTP error or a body that is not JSON.
            MissingData: The API answered but has no data for this part.
        """
        cache_path = self._get_cache_path(f"cad_{lcsc_id}", "json")
        cached_data = self._load_from_cache(cache_path)
        if cached_data:
            return json.loads(cached_data)

        logger.info(f"Fetching CAD data for {lcsc_id}")
        r = self._get(API_ENDPOINT.format(lcsc_id=lcsc_id))
        if r.status_code != requests.codes.ok:
            raise ApiError(f"HTTP {r.status_code}", {"lcsc_id": lcsc_id})
        try:
            body = r.json()
        except ValueError as e:
            raise ApiError("Response is not valid JSON", {"lcsc_id": lcsc_id}) from e

        if not isinstance(body, dict):
            raise ApiError("Unexpected response body", {"lcsc_id": lcsc_id})
        if not body.get("success"):
            raise MissingData(
                "API Error",
                {"lcsc_id": lcsc_id, "message": body.get("message") or "Unknown API error"},
            )
        cad_data = body.get("result")
        if cad_data is None:
            raise MissingData("API response missing 'result' field", {"lcsc_id": lcsc_id})
        if not isinstance(cad_data, dict):
            raise MissingData(
                "API 'result' field is not an object",
                {"lcsc_id": lcsc_id, "type": type(cad_data).__name__},
            )

        self._save_to_cache(cache_path, json.dumps(cad_data).encode("utf-8"))
        return cad_data

    def _get_model_bytes(self, url: str, cache_path: Optional[Path], kind: str) -> Optional[bytes]:
        cached_data = self._load_from_cache(cache_path)
        if cached_data:
            return cached_data
        try:
            r = self._get(url)
        except ApiError as e:
            logger.warning(f"Could not download {kind} model: {e}")
            return None
        if r.status_code != requests.codes.ok:
            logger.warning(f"No {kind} model at {url} (HTTP {r.status_code})")
            return None
        self._save_to_cache(cache_path, r.content)
        return r.content

    def get_raw_3d_model_obj(self, uuid: str) -> Optional[str]:
        """Download the OBJ mesh of a 3D model, or None if unavailable."""
        data = self._get_model_bytes(
            MODEL_OBJ_ENDPOINT.format(uuid=uuid), self._get_cache_path(f"model_{uuid}", "obj"), "OBJ"
        )
        return data.decode("utf-8", errors="replace") if data is not None else None

    def get_step_3d_model(self, uuid: str) -> Optional[bytes]:
        """Download the STEP file of a 3D model, or None if unavailable."""
        return self._get_model_bytes(
            MODEL_STEP_ENDPOINT.format(uuid=uuid), self._get_cache_path(f"model_{uuid}", "step"), "STEP"
        )
