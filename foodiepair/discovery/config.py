from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class DiscoveryConfig:
    overpass_url: str = os.getenv("OVERPASS_URL", "https://overpass-api.de/api/interpreter")
    timeout: float = 25.0
    default_radius: int = 2000
    user_agent: str = "foodiepair-discovery/0.1.0"
    enabled: bool = os.getenv("DISCOVERY_ENABLED", "1") != "0"


DEFAULT_DISCOVERY_CONFIG = DiscoveryConfig()
