"""Self-update from the project's latest GitHub release.

The release is expected to carry a pure-Python wheel; it is downloaded,
sanity-checked as a zip archive and installed into the running interpreter's
environment with pip.
"""

from __future__ import annotations

import io
import json
import logging
import subprocess
import sys
import tempfile
import urllib.error
import urllib.request
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from wcag_lsp import __version__
from wcag_lsp.exceptions import (
    AssetNotFoundError,
    ExtractError,
    NetworkError,
    ReleaseFormatError,
    ReplaceError,
    UnsupportedPlatformError,
)

logger = logging.getLogger(__name__)

RELEASES_URL = "https://api.github.com/repos/maxischmaxi/wcag-lsp/releases/latest"
USER_AGENT = "wcag-lsp-updater"
PACKAGE_MARKER = "wcag_lsp/__init__.py"

RunFn = Callable[..., subprocess.CompletedProcess]


@dataclass(frozen=True)
class ReleaseAsset:
    name: str
    download_url: str


@dataclass(frozen=True)
class Release:
    tag: str
    assets: tuple[ReleaseAsset, ...]


def parse_version(tag: str) -> tuple[int, ...]:
    """Plain release versions only; pre-release and build tags raise."""
    text = tag.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    if "-" in text or "+" in text:
        raise ReleaseFormatError(f"pre-release and build tags are not installable: {tag!r}")
    parts = text.split(".")
    if not text or len(parts) > 3 or not all(part.isdigit() for part in parts):
        raise ReleaseFormatError(f"not a release version: {tag!r}")
    numbers = tuple(int(part) for part in parts)
    return numbers + (0,) * (3 - len(numbers))


def is_newer(remote_tag: str, local_version: str = __version__) -> bool:
    return parse_version(remote_tag) > parse_version(local_version)


def wheel_asset_name(tag: str) -> str:
    version = ".".join(str(part) for part in parse_version(tag))
    return f"wcag_lsp-{version}-py3-none-any.whl"


def _request(url: str, accept: str) -> urllib.request.Request:
    return urllib.request.Request(url, headers={"Accept": accept, "User-Agent": USER_AGENT})


def fetch_release(
    urlopen_fn: Callable[..., object] = urllib.request.urlopen,
    url: str = RELEASES_URL,
) -> Release:
    try:
        with urlopen_fn(_request(url, "application/vnd.github+json"), timeout=20) as response:
            raw = response.read()
    except (urllib.error.URLError, OSError) as exc:
        raise NetworkError(f"unable to query releases: {exc}") from exc
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReleaseFormatError(f"release metadata is not JSON: {exc}") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("tag_name"), str):
        raise ReleaseFormatError("release metadata has no tag_name")
    assets = []
    for item in payload.get("assets", []) or []:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        download_url = item.get("browser_download_url")
        if isinstance(name, str) and isinstance(download_url, str):
            assets.append(ReleaseAsset(name=name, download_url=download_url))
    return Release(tag=payload["tag_name"], assets=tuple(assets))


def download(
    asset: ReleaseAsset,
    urlopen_fn: Callable[..., object] = urllib.request.urlopen,
) -> bytes:
    try:
        with urlopen_fn(_request(asset.download_url, "application/octet-stream"), timeout=60) as response:
            return response.read()
    except (urllib.error.URLError, OSError) as exc:
        raise NetworkError(f"unable to download {asset.name}: {exc}") from exc


def verify_wheel(archive_bytes: bytes) -> None:
    try:
        with zipfile.ZipFile(io.BytesIO(archive_bytes)) as zf:
            names = zf.namelist()
            if zf.testzip() is not None:
                raise ExtractError("wheel archive is corrupt")
    except zipfile.BadZipFile as exc:
        raise ExtractError(f"wheel is not a zip archive: {exc}") from exc
    if PACKAGE_MARKER not in names:
        raise ExtractError(f"wheel does not contain {PACKAGE_MARKER}")


def install_wheel(
    archive_bytes: bytes,
    asset_name: str,
    run_fn: RunFn = subprocess.run,
) -> None:
    if not sys.executable:
        raise UnsupportedPlatformError("cannot locate the running Python interpreter")
    with tempfile.TemporaryDirectory(prefix="wcag-lsp-update-") as tmp:
        wheel_path = Path(tmp) / asset_name
        wheel_path.write_bytes(archive_bytes)
        command = [sys.executable, "-m", "pip", "install", "--upgrade", str(wheel_path)]
        try:
            run_fn(command, check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip().splitlines()
            raise ReplaceError(detail[-1] if detail else f"pip exited with {exc.returncode}") from exc
        except OSError as exc:
            raise ReplaceError(str(exc)) from exc


def run_update(
    urlopen_fn: Callable[..., object] = urllib.request.urlopen,
    run_fn: RunFn = subprocess.run,
    local_version: str = __version__,
) -> str | None:
    """Install the latest release if it is newer; returns its tag, or None
    when already up to date. Raises an `UpdateError` subclass on failure."""
    release = fetch_release(urlopen_fn=urlopen_fn)
    if not is_newer(release.tag, local_version):
        logger.info("already at %s (latest release %s)", local_version, release.tag)
        return None
    expected = wheel_asset_name(release.tag)
    asset = next((item for item in release.assets if item.name == expected), None)
    if asset is None:
        raise AssetNotFoundError(expected)
    archive_bytes = download(asset, urlopen_fn=urlopen_fn)
    verify_wheel(archive_bytes)
    install_wheel(archive_bytes, asset.name, run_fn=run_fn)
    logger.info("updated to %s", release.tag)
    return release.tag
