from __future__ import annotations

from codeatlas.domain.constants import USER_AGENT

DEFAULT_TIMEOUT = 10

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Content-Type": "application/json",
}
