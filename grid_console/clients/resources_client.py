from __future__ import annotations

from typing import Any

from grid_console.clients.http_client import GatewayResult, HttpClient


class ResourceClient:
    """REST collection endpoints of one console resource, e.g. ``/api/contests``."""

    def __init__(self, http_client: HttpClient, resource_path: str) -> None:
        self.http_client = http_client
        self.resource_path = "/" + resource_path.strip("/")

    def list(self, params: dict[str, Any], *, deleted: bool = False, list_path: str | None = None) -> GatewayResult:
        if deleted:
            path = f"{self.resource_path}/deleted/list"
        elif list_path:
            path = f"{self.resource_path}/{list_path.strip('/')}"
        else:
            path = self.resource_path
        return self.http_client.request("GET", path, params=build_query_params(params))

    def facet(self, facet: str) -> GatewayResult:
        return self.http_client.request("GET", f"{self.resource_path}/{facet.strip('/')}")

    def get(self, record_id: str | int) -> GatewayResult:
        return self.http_client.request("GET", f"{self.resource_path}/{record_id}")

    def create(self, payload: dict[str, Any]) -> GatewayResult:
        return self.http_client.request("POST", self.resource_path, body=payload)

    def update(self, record_id: str | int, payload: dict[str, Any]) -> GatewayResult:
        return self.http_client.request("PUT", f"{self.resource_path}/{record_id}", body=payload)

    def delete(self, record_id: str | int) -> GatewayResult:
        return self.http_client.request("DELETE", f"{self.resource_path}/{record_id}")

    def restore(self, record_id: str | int) -> GatewayResult:
        return self.http_client.request("PUT", f"{self.resource_path}/{record_id}/restore")

    def purge(self, record_id: str | int) -> GatewayResult:
        return self.http_client.request("DELETE", f"{self.resource_path}/{record_id}/permanent")

    def run_job(self, job_path: str, payload: dict[str, Any] | None = None) -> GatewayResult:
        return self.http_client.request("POST", f"{self.resource_path}/{job_path.strip('/')}", body=payload)


def build_query_params(params: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value not in (None, "")}
