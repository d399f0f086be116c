"""
Connection probe. Decides once how upstream calls are routed.

checking -> proxy-local | proxy-remote | direct-unsupported

The deployment flag comes from config rather than from sniffing the host
name, so the outcome depends only on (proxy reachable?, config.deployment).
"""

import logging

import requests

from config.settings import Config
from models import ConnectionMode

log = logging.getLogger(__name__)


class ConnectionProbe:
    def __init__(self, config: Config, session: requests.Session | None = None):
        self._config = config
        self._session = session or requests.Session()
        self.mode = ConnectionMode.CHECKING

    def run(self) -> ConnectionMode:
        """
        Resolve the connection mode. No retries.

        Any HTTP response from the local proxy counts as reachable; only a
        network-level failure (refused, timeout, DNS) falls through.
        """
        self.mode = ConnectionMode.CHECKING
        url = f"{self._config.proxy_url.rstrip('/')}/api/youtube-proxy"

        try:
            resp = self._session.post(url, json={"action": "ping"}, timeout=self._config.probe_timeout)
            log.debug(f"Probe {url}: HTTP {resp.status_code}")
            self.mode = ConnectionMode.PROXY_LOCAL
        except requests.RequestException as e:
            log.info(f"Local proxy not available at {url}: {e}")
            if self._config.deployment.lower() == "remote":
                self.mode = ConnectionMode.PROXY_REMOTE
            else:
                self.mode = ConnectionMode.DIRECT_UNSUPPORTED

        log.info(f"Connection mode: {self.mode.value}")
        return self.mode


def describe_mode(mode: ConnectionMode) -> str:
    """One-line status text for a mode."""
    return {
        ConnectionMode.CHECKING: "Checking backend...",
        ConnectionMode.PROXY_LOCAL: "Local backend connected",
        ConnectionMode.PROXY_REMOTE: "Remote backend ready",
        ConnectionMode.DIRECT_UNSUPPORTED: "Direct mode (upstream calls expected to fail)",
    }[mode]
