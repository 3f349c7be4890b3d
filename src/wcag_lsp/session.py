"""Editing-session orchestration: store updates, debounce, publication.

Every change reparses synchronously so the stored tree always matches the
stored text, but diagnostics for a change are computed only after the
debounce interval and only if no newer version of the document arrived in
the meantime. Superseded tasks are not cancelled; they wake up, see that the
version ledger has moved on and exit without publishing.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Callable, Iterable
from urllib.parse import unquote, urlparse

from wcag_lsp.checks import default_registry
from wcag_lsp.config import load_policy
from wcag_lsp.documents import DocumentStore
from wcag_lsp.engine import Diagnostic, run
from wcag_lsp.policy import Policy
from wcag_lsp.registry import Check

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.150

Publish = Callable[[str, "list[Diagnostic]", "int | None"], None]


def uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(uri)


class VersionLedger:
    """Latest version seen per URI, written before a debounce task starts."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._versions: dict[str, int] = {}

    def record(self, uri: str, version: int) -> None:
        with self._lock:
            self._versions[uri] = version

    def latest(self, uri: str) -> int | None:
        with self._lock:
            return self._versions.get(uri)

    def forget(self, uri: str) -> None:
        with self._lock:
            self._versions.pop(uri, None)


class SessionCoordinator:
    def __init__(
        self,
        publish: Publish,
        checks: Iterable[Check] | None = None,
        store: DocumentStore | None = None,
        debounce: float = DEFAULT_DEBOUNCE,
        policy: Policy | None = None,
    ) -> None:
        self.publish = publish
        self.checks = tuple(checks if checks is not None else default_registry())
        self.store = store if store is not None else DocumentStore()
        self.debounce = debounce
        self.ledger = VersionLedger()
        self.root: Path | None = None
        self._policy_lock = threading.Lock()
        self._policy = policy if policy is not None else Policy()
        self._pending: set[asyncio.Task] = set()

    @property
    def policy(self) -> Policy:
        with self._policy_lock:
            return self._policy

    def set_policy(self, policy: Policy) -> None:
        with self._policy_lock:
            self._policy = policy

    def load_policy(self, root: Path | None) -> Policy:
        self.root = root
        policy = load_policy(root) if root is not None else Policy()
        self.set_policy(policy)
        return policy

    def did_open(self, uri: str, text: str, version: int) -> None:
        document = self.store.open(uri, text, version)
        if document is None:
            logger.debug("not tracking %s", uri)
            return
        self.ledger.record(uri, version)
        self.publish(uri, self.diagnose(uri), version)

    def did_change(self, uri: str, text: str, version: int) -> asyncio.Task | None:
        document = self.store.update(uri, text, version)
        if document is None:
            return None
        self.ledger.record(uri, version)
        task = asyncio.create_task(self._publish_after_debounce(uri, version))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _publish_after_debounce(self, uri: str, version: int) -> None:
        await asyncio.sleep(self.debounce)
        if self.ledger.latest(uri) != version:
            return
        diagnostics = self.diagnose(uri)
        # A close or newer edit may have landed while the checks ran.
        if self.ledger.latest(uri) != version:
            return
        self.publish(uri, diagnostics, version)

    def did_close(self, uri: str) -> None:
        self.store.close(uri)
        self.ledger.forget(uri)
        self.publish(uri, [], None)

    def _is_ignored(self, policy: Policy, uri: str) -> bool:
        if not policy.ignore_patterns:
            return False
        path = uri_to_path(uri)
        relative = None
        if self.root is not None:
            try:
                relative = path.relative_to(self.root).as_posix()
            except ValueError:
                pass
        return policy.is_ignored(path.as_posix(), relative)

    def diagnose(self, uri: str) -> list[Diagnostic]:
        policy = self.policy
        if self._is_ignored(policy, uri):
            return []
        with self.store.lock:
            document = self.store.get(uri)
            if document is None:
                return []
            return run(document, self.checks, policy)

    def shutdown(self) -> None:
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()
