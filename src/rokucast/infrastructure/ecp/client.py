"""Roku External Control Protocol client (async httpx)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from urllib.parse import quote

import httpx
import structlog

from rokucast.domain.entities.playback import (
    CommandRejectedError,
    DeviceUnreachableError,
    PlaybackError,
)

log = structlog.get_logger(__name__)

ECP_PORT = 8060


class HttpxEcpClient:
    """Async ECP client using a shared httpx.AsyncClient.

    Implements ``EcpClientPort`` from domain.ports.ecp.  Commands are
    fire-and-forget: a 2xx answer only means the device accepted the
    request, not that anything happened on screen.
    """

    def __init__(self, *, http_client: httpx.AsyncClient, port: int = ECP_PORT) -> None:
        self._http = http_client
        self._port = port

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _url(self, device: str, path: str) -> str:
        return f"http://{device}:{self._port}{path}"

    async def _request(self, method: str, device: str, path: str) -> httpx.Response:
        url = self._url(device, path)
        try:
            resp = await self._http.request(method, url)
        except httpx.HTTPError as exc:
            log.warning(
                "ecp_request_failed",
                device=device,
                url=url,
                error=type(exc).__name__,
            )
            raise DeviceUnreachableError(device, url, str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            log.warning(
                "ecp_request_rejected",
                device=device,
                url=url,
                status=resp.status_code,
            )
            raise CommandRejectedError(device, url, resp.status_code)

        log.debug("ecp_request_sent", device=device, method=method, path=path)
        return resp

    @staticmethod
    def _parse_xml(device: str, url: str, body: bytes) -> ET.Element:
        try:
            return ET.fromstring(body)
        except ET.ParseError as exc:
            raise PlaybackError(
                f"Roku device {device} returned invalid XML from {url}: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Public API (EcpClientPort)
    # ------------------------------------------------------------------

    async def launch(self, device: str, channel_id: str, params: str = "") -> None:
        """``POST /launch/<channel_id>[?params]``; params are sent verbatim."""
        path = f"/launch/{quote(channel_id, safe='')}"
        if params:
            path = f"{path}?{params}"
        await self._request("POST", device, path)

    async def keypress(self, device: str, key_name: str) -> None:
        """``POST /keypress/<key_name>`` (e.g. ``Select``, ``Lit_A``, ``Lit_%20``)."""
        await self._request("POST", device, f"/keypress/{key_name}")

    async def query_apps(self, device: str) -> list[dict[str, str]]:
        """Installed channels from ``GET /query/apps``."""
        resp = await self._request("GET", device, "/query/apps")
        root = self._parse_xml(device, self._url(device, "/query/apps"), resp.content)
        return [
            {
                "id": app.get("id", ""),
                "type": app.get("type", ""),
                "version": app.get("version", ""),
                "name": (app.text or "").strip(),
            }
            for app in root.iter("app")
        ]

    async def query_device_info(self, device: str) -> dict[str, str]:
        """Flat ``<device-info>`` children as a dict (``model-name`` -> ...)."""
        resp = await self._request("GET", device, "/query/device-info")
        root = self._parse_xml(
            device, self._url(device, "/query/device-info"), resp.content
        )
        return {child.tag: (child.text or "").strip() for child in root}
