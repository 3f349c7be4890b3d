from __future__ import annotations

import asyncio
from pathlib import Path

from wcag_lsp.config import DEFAULT_CONFIG_NAME
from wcag_lsp.session import SessionCoordinator, VersionLedger, uri_to_path

URI = "file:///workspace/page.html"


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], int | None]] = []

    def __call__(self, uri, diagnostics, version) -> None:
        self.calls.append((uri, [diagnostic.code for diagnostic in diagnostics], version))

    @property
    def versions(self) -> list[int | None]:
        return [version for _, _, version in self.calls]


def _session(debounce: float = 0.01) -> tuple[SessionCoordinator, _Recorder]:
    recorder = _Recorder()
    return SessionCoordinator(recorder, debounce=debounce), recorder


def test_uri_to_path() -> None:
    assert uri_to_path("file:///tmp/a%20b/page.html") == Path("/tmp/a b/page.html")
    assert uri_to_path("untitled:1") == Path("untitled:1")


def test_version_ledger() -> None:
    ledger = VersionLedger()
    assert ledger.latest(URI) is None
    ledger.record(URI, 3)
    ledger.record(URI, 4)
    assert ledger.latest(URI) == 4
    ledger.forget(URI)
    assert ledger.latest(URI) is None


def test_open_publishes_immediately() -> None:
    session, recorder = _session()
    session.did_open(URI, "<img src=a.png>", 1)
    assert recorder.calls == [(URI, ["img-alt", "page-title"], 1)]


def test_unsupported_documents_are_not_tracked() -> None:
    async def scenario(session: SessionCoordinator) -> None:
        session.did_open("file:///workspace/notes.md", "# notes", 1)
        assert session.did_change("file:///workspace/notes.md", "# more", 2) is None

    session, recorder = _session()
    asyncio.run(scenario(session))
    assert recorder.calls == []


def test_burst_of_edits_publishes_once_for_the_latest_version() -> None:
    async def scenario(session: SessionCoordinator) -> None:
        session.did_open(URI, "<title>t</title>", 1)
        tasks = [
            session.did_change(URI, "<title>t</title><img src=a>", 2),
            session.did_change(URI, "<title>t</title><img src=a alt=''>", 3),
            session.did_change(URI, "<title>t</title><img src=b>", 4),
        ]
        await asyncio.gather(*tasks)

    session, recorder = _session()
    asyncio.run(scenario(session))
    assert recorder.versions == [1, 4]
    assert recorder.calls[-1] == (URI, ["img-alt"], 4)


def test_stored_tree_tracks_every_edit_even_without_publication() -> None:
    async def scenario(session: SessionCoordinator) -> None:
        session.did_open(URI, "<p>a</p>", 1)
        session.did_change(URI, "<p>ab</p>", 2)
        session.did_change(URI, "<p>abc</p>", 3)
        document = session.store.get(URI)
        assert document is not None
        assert document.version == 3
        assert document.text == "<p>abc</p>"
        session.shutdown()

    session, _ = _session(debounce=10)
    asyncio.run(scenario(session))


def test_close_before_debounce_suppresses_stale_publication() -> None:
    async def scenario(session: SessionCoordinator) -> None:
        session.did_open(URI, "<title>t</title>", 1)
        task = session.did_change(URI, "<title>t</title><img src=a>", 2)
        session.did_close(URI)
        await task

    session, recorder = _session()
    asyncio.run(scenario(session))
    assert recorder.calls == [(URI, [], 1), (URI, [], None)]
    assert session.store.get(URI) is None


def test_reopen_after_close_publishes_new_version() -> None:
    async def scenario(session: SessionCoordinator) -> None:
        session.did_open(URI, "<title>t</title>", 1)
        stale = session.did_change(URI, "<title>t</title><img src=a>", 2)
        session.did_close(URI)
        session.did_open(URI, "<title>t</title><img src=b>", 1)
        await stale

    session, recorder = _session()
    asyncio.run(scenario(session))
    assert recorder.versions == [1, None, 1]
    assert recorder.calls[-1][1] == ["img-alt"]


def test_ignored_documents_publish_empty_lists(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_CONFIG_NAME).write_text('[ignore]\npatterns = ["vendor/*"]\n')
    session, recorder = _session()
    session.load_policy(tmp_path)
    ignored = (tmp_path / "vendor" / "lib.html").as_uri()
    kept = (tmp_path / "src" / "page.html").as_uri()
    session.did_open(ignored, "<img src=a>", 1)
    session.did_open(kept, "<img src=a>", 1)
    assert recorder.calls[0] == (ignored, [], 1)
    assert "img-alt" in recorder.calls[1][1]


def test_relative_ignore_patterns_stay_at_their_depth(tmp_path: Path) -> None:
    (tmp_path / DEFAULT_CONFIG_NAME).write_text('[ignore]\npatterns = ["*.html"]\n')
    session, recorder = _session()
    session.load_policy(tmp_path)
    top = (tmp_path / "index.html").as_uri()
    nested = (tmp_path / "src" / "page.html").as_uri()
    session.did_open(top, "<img src=a>", 1)
    session.did_open(nested, "<img src=a>", 1)
    assert recorder.calls[0] == (top, [], 1)
    assert "img-alt" in recorder.calls[1][1]


def test_policy_swap_applies_to_next_run(tmp_path: Path) -> None:
    session, recorder = _session()
    (tmp_path / DEFAULT_CONFIG_NAME).write_text('[rules]\nimg-alt = "off"\npage-title = "off"\n')
    session.did_open(URI, "<img src=a>", 1)
    session.load_policy(tmp_path)
    session.did_open(URI, "<img src=a>", 2)
    assert recorder.calls == [(URI, ["img-alt", "page-title"], 1), (URI, [], 2)]
    assert session.root == tmp_path


def test_shutdown_cancels_pending_work() -> None:
    async def scenario(session: SessionCoordinator) -> bool:
        session.did_open(URI, "<p>a</p>", 1)
        task = session.did_change(URI, "<p>b</p>", 2)
        session.shutdown()
        await asyncio.sleep(0)
        return task.cancelled()

    session, recorder = _session(debounce=10)
    assert asyncio.run(scenario(session))
    assert recorder.versions == [1]
