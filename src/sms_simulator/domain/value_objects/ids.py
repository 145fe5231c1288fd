from __future__ import annotations

from typing import NewType

DeviceKey = NewType("DeviceKey", str)
