"""Stock network checks — HTTP(S), DNS resolve, TCP connect.

Each returns a result record and accepts the registry's per-call params,
passing ``id`` and ``label`` through::

    hc.register({"check": http_check, "url": "https://api/health", "id": "api"})
"""

from __future__ import annotations

import socket
import time
from typing import Any

import httpx

from ..config import settings
from ..core.models import Status


def _result(status: Status, info: str, t0: float, params: dict[str, Any], **extra: Any) -> dict[str, Any]:
    result: dict[str, Any] = {
        "status": status.value,
        "info": info,
        "latency_ms": round((time.perf_counter() - t0) * 1000, 1),
    }
    for key in ("id", "label"):
        if params.get(key) is not None:
            result[key] = params[key]
    result.update(extra)
    return result


def http_check(
    url: str,
    method: str = "GET",
    expected_status: int = 200,
    timeout_ms: int | None = None,
    **params: Any,
) -> dict[str, Any]:
    """HTTP(S) check — status code + latency, WARNING when slow."""
    timeout_ms = timeout_ms or settings.http_timeout_ms
    t0 = time.perf_counter()
    try:
        with httpx.Client(timeout=timeout_ms / 1000, follow_redirects=True) as client:
            resp = client.request(method, url)
    except httpx.TimeoutException:
        return _result(Status.CRITICAL, f"Timed out after {timeout_ms}ms", t0, params)
    except httpx.HTTPError as e:
        return _result(Status.CRITICAL, f"Connection error: {e}", t0, params)

    latency_ms = (time.perf_counter() - t0) * 1000
    if resp.status_code != expected_status:
        return _result(
            Status.CRITICAL,
            f"Expected {expected_status}, got {resp.status_code}",
            t0, params, status_code=resp.status_code,
        )
    if latency_ms > settings.http_slow_ms:
        return _result(
            Status.WARNING,
            f"{resp.status_code} but slow ({latency_ms:.0f}ms)",
            t0, params, status_code=resp.status_code,
        )
    return _result(Status.OK, f"{resp.status_code} OK", t0, params, status_code=resp.status_code)


def dns_check(hostname: str, timeout_ms: int | None = None, **params: Any) -> dict[str, Any]:
    """DNS resolution check."""
    timeout_ms = timeout_ms or settings.dns_timeout_ms
    t0 = time.perf_counter()
    previous = socket.getdefaulttimeout()
    try:
        socket.setdefaulttimeout(timeout_ms / 1000)
        addrs = socket.getaddrinfo(hostname, None)
    except OSError as e:
        return _result(Status.CRITICAL, f"DNS resolution failed: {e}", t0, params)
    finally:
        socket.setdefaulttimeout(previous)

    ips = sorted({a[4][0] for a in addrs})
    return _result(Status.OK, f"Resolved to {', '.join(ips[:3])}", t0, params, ips=ips)


def tcp_check(
    hostname: str,
    port: int = 443,
    timeout_ms: int | None = None,
    **params: Any,
) -> dict[str, Any]:
    """Raw TCP port connectivity check."""
    timeout_ms = timeout_ms or settings.tcp_timeout_ms
    t0 = time.perf_counter()
    try:
        with socket.create_connection((hostname, port), timeout=timeout_ms / 1000):
            pass
    except OSError as e:
        return _result(Status.CRITICAL, f"TCP connect failed: {type(e).__name__}: {e}", t0, params)
    return _result(Status.OK, f"Port {port} open", t0, params)
