"""Exception taxonomy for wcag-lsp.

Only the self-update path and registry construction raise; everything on the
editing path (policy loading, unsupported documents, reparse failures)
degrades to a quiet "nothing to report" outcome instead.
"""

from __future__ import annotations


class WcagLspError(RuntimeError):
    """Base class for errors raised by wcag-lsp."""


class DuplicateCheckError(WcagLspError):
    """A check id was registered twice."""

    def __init__(self, check_id: str):
        super().__init__(f"check already registered: {check_id}")
        self.check_id = check_id


class UpdateError(WcagLspError):
    """Base class for self-update failures."""

    kind = "update"


class NetworkError(UpdateError):
    kind = "network"


class ReleaseFormatError(UpdateError):
    """The release metadata could not be decoded or lacks a version tag."""

    kind = "release"


class AssetNotFoundError(UpdateError):
    kind = "asset"

    def __init__(self, asset: str):
        super().__init__(f"release asset not found: {asset}")
        self.asset = asset


class UnsupportedPlatformError(UpdateError):
    kind = "platform"


class ExtractError(UpdateError):
    kind = "extract"


class ReplaceError(UpdateError):
    """Installing the downloaded release over the running one failed."""

    kind = "replace"
