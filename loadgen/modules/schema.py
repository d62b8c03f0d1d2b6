# loadgen/modules/schema.py

import random
import re
from typing import Dict, List, Tuple

from loadgen.modules.generators import (
    Constant,
    RandomOctet,
    RandomString,
    UniqueIdTemplate,
    UuidLike,
    ValueGenerator,
)

_LABEL_UNSAFE = re.compile(r"[^A-Za-z0-9_]")


def label_name(field_name: str) -> str:
    """'kubernetes.labels.app.kubernetes.io/managed-by' -> 'kubernetes_labels_app_kubernetes_io_managed_by'"""
    return _LABEL_UNSAFE.sub("_", field_name)


class RecordSchema:
    """
    Ordered list of (field name, value generator) pairs.
    The same schema renders both flat JSON records (dotted names) and
    Loki stream labels (sanitized names); only the final nesting differs.
    """

    def __init__(self, fields: List[Tuple[str, ValueGenerator]]):
        self.fields = list(fields)
        self.label_names = [label_name(name) for name, _ in self.fields]

        if len(set(self.label_names)) != len(self.label_names):
            raise ValueError("Field names collide once sanitized to label names.")

    def __len__(self):
        return len(self.fields)

    def names(self, label_names: bool = False) -> List[str]:
        if label_names:
            return list(self.label_names)
        return [name for name, _ in self.fields]

    def render(self, unique_id: int, rng: random.Random, label_names: bool = False) -> Dict[str, str]:
        """Evaluates every generator once, in schema order."""
        keys = self.label_names if label_names else [name for name, _ in self.fields]
        return {
            key: generator(unique_id, rng)
            for key, (_, generator) in zip(keys, self.fields)
        }

    def constant_fields(self) -> List[str]:
        return [name for name, gen in self.fields if isinstance(gen, Constant)]

    def unique_fields(self) -> List[str]:
        return [name for name, gen in self.fields if isinstance(gen, UniqueIdTemplate)]


# Prometheus pod of a kube-prometheus stack running on EKS.
# "log" is not part of the schema: it is placed per variant.
KUBERNETES_FIELDS: List[Tuple[str, ValueGenerator]] = [
    ("kubernetes.annotations.kubectl.kubernetes.io/default-container", Constant("prometheus")),
    ("kubernetes.annotations.kubernetes.io/psp", Constant("eks.privileged")),
    ("kubernetes.container_hash", RandomString(64, prefix="quay.io/prometheus/prometheus@sha256:")),
    ("kubernetes.container_image", Constant("quay.io/prometheus/prometheus:v2.39.1")),
    ("kubernetes.container_name", Constant("prometheus")),
    ("kubernetes.docker_id", RandomString(64)),
    ("kubernetes.host", RandomOctet("ip-10-2-50-{octet}.us-east-2.compute.internal")),
    ("kubernetes.labels.app.kubernetes.io/component", Constant("prometheus")),
    ("kubernetes.labels.app.kubernetes.io/instance", UniqueIdTemplate("k8s-{id}")),
    ("kubernetes.labels.app.kubernetes.io/managed-by", Constant("prometheus-operator")),
    ("kubernetes.labels.app.kubernetes.io/name", Constant("prometheus")),
    ("kubernetes.labels.app.kubernetes.io/part-of", Constant("kube-prometheus")),
    ("kubernetes.labels.app.kubernetes.io/version", Constant("2.39.1")),
    ("kubernetes.labels.controller-revision-hash", RandomString(10, prefix="prometheus-k8s-")),
    ("kubernetes.labels.operator.prometheus.io/name", Constant("k8s")),
    ("kubernetes.labels.operator.prometheus.io/shard", Constant("0")),
    ("kubernetes.labels.prometheus", Constant("k8s")),
    ("kubernetes.labels.statefulset.kubernetes.io/pod-name", UniqueIdTemplate("prometheus-k8s-{id}")),
    ("kubernetes.namespace_name", Constant("monitoring")),
    ("kubernetes.pod_id", UuidLike()),
    ("kubernetes.pod_name", UniqueIdTemplate("prometheus-k8s-{id}")),
    ("stream", Constant("stderr")),
]

KUBERNETES_SCHEMA = RecordSchema(KUBERNETES_FIELDS)
