# loadgen/modules/loki_push.py

import random
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from loadgen.core.config import Settings
from loadgen.modules.generators import json_line, logfmt_line, nanosecond_timestamp

PUSH_PATH = "/loki/api/v1/push"

# Label values each stream draws from
LABEL_POOL: Dict[str, List[str]] = {
    "format": ["json", "logfmt"],
    "os": ["darwin", "linux", "windows"],
    "namespace": ["monitoring", "ingress-nginx", "kube-system", "payments", "checkout"],
    "app": ["prometheus", "grafana", "alertmanager", "node-exporter", "loki"],
    "pod": ["pod-0", "pod-1", "pod-2", "pod-3", "pod-4", "pod-5", "pod-6", "pod-7"],
    "language": ["go", "python", "java", "rust", "node"],
    "word": ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf", "hotel"],
}

LINE_FORMATS = {
    "json": json_line,
    "logfmt": logfmt_line,
}


def split_base_url(base_url: str) -> Tuple[str, Optional[str]]:
    """
    'http://42@localhost:9428/insert' -> ('http://localhost:9428/insert', '42')
    The userinfo part of the URL names the tenant.
    """
    parts = urlsplit(base_url)
    tenant = parts.username
    netloc = parts.netloc.rpartition("@")[2]
    return urlunsplit((parts.scheme, netloc, parts.path.rstrip("/"), parts.query, "")), tenant


def push_url(base_url: str) -> str:
    url, _ = split_base_url(base_url)
    return url + PUSH_PATH


class LokiPushBuilder:
    """
    Builds a Loki push with a fixed number of streams and a random total size.

    Lines are appended round-robin across the streams until their combined
    uncompressed size reaches a target drawn uniformly from
    [LOKI_MIN_BATCH_BYTES, LOKI_MAX_BATCH_BYTES].
    """

    def __init__(self, settings: Settings, base_url: str):
        self.streams = settings.LOKI_STREAMS
        self.min_bytes = settings.LOKI_MIN_BATCH_BYTES
        self.max_bytes = settings.LOKI_MAX_BATCH_BYTES
        self.field_count = settings.FIELD_COUNT
        self.url, url_tenant = split_base_url(base_url)
        self.tenant = settings.TENANT_ID or url_tenant

    def tenant_for(self, vu: int) -> str:
        # No configured tenant: every VU pushes as its own numeric tenant
        return self.tenant or str(vu)

    def labels_for(self, vu: int, rng: random.Random) -> Dict[str, str]:
        labels = {"instance": f"vu{vu}.loadgen.local"}
        for name, values in LABEL_POOL.items():
            labels[name] = rng.choice(values)
        return labels

    def build(self, vu: int, rng: Optional[random.Random] = None) -> Dict[str, list]:
        rng = rng or random.Random()
        target = rng.randint(self.min_bytes, self.max_bytes)

        streams = [{"stream": self.labels_for(vu, rng), "values": []} for _ in range(self.streams)]
        size = 0
        i = 0
        while size < target:
            entry = streams[i % self.streams]
            line = LINE_FORMATS[entry["stream"]["format"]](rng, self.field_count)
            entry["values"].append([nanosecond_timestamp(), line])
            size += len(line)
            i += 1

        return {"streams": streams}

    @staticmethod
    def line_bytes(push: Dict[str, list]) -> int:
        return sum(len(line) for entry in push["streams"] for _, line in entry["values"])
