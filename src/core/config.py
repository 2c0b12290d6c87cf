"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QrAssetConfig:
    """Image sent for the /qr command."""

    path: str
    caption: str = "Paytm QR Code"
