from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel


class IgnoreSection(BaseModel):
    patterns: List[str] = []


class PolicyFile(BaseModel):
    """Shape of `.wcag-lsp.toml`; values are interpreted by `wcag_lsp.policy`."""

    severity: Dict[str, str] = {}
    rules: Dict[str, str] = {}
    ignore: IgnoreSection = IgnoreSection()
