# loadgen/modules/generators.py

import datetime
import json
import random
import string
import time
from typing import Optional

ALPHABET = string.ascii_lowercase + string.digits


def random_string(length: int, rng: Optional[random.Random] = None) -> str:
    """Uniform random string over [a-z0-9] of exactly `length` characters."""
    rng = rng or random
    return "".join(rng.choice(ALPHABET) for _ in range(length))


def uuid_like(rng: Optional[random.Random] = None) -> str:
    """
    8-4-4-4-12 hyphenated identifier built from random_string.
    Looks like a UUID, but carries no version/variant bits.
    """
    return "-".join(random_string(n, rng) for n in (8, 4, 4, 4, 12))


def iso_timestamp(now: Optional[datetime.datetime] = None) -> str:
    # 2024-01-01T00:00:00.000Z
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return now.astimezone(datetime.timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def nanosecond_timestamp() -> str:
    return str(time.time_ns())


def logfmt_line(rng: Optional[random.Random] = None, field_count: int = 24) -> str:
    """ts=<iso> field0=<v> field1=<v> ..."""
    parts = [f"ts={iso_timestamp()}"]
    for i in range(field_count):
        parts.append(f"field{i}={random_string(10, rng)}")
    return " ".join(parts)


def json_line(rng: Optional[random.Random] = None, field_count: int = 24) -> str:
    """{"ts":"<iso>","field0":"<v>",...} with keys in order."""
    fields = {"ts": iso_timestamp()}
    for i in range(field_count):
        fields[f"field{i}"] = random_string(10, rng)
    return json.dumps(fields, separators=(",", ":"))


# -----------------------------------------------------------
# Value generators
# Each one is called as generate(unique_id, rng) -> str
# -----------------------------------------------------------
class ValueGenerator:
    """Produces one field value for a record."""

    def generate(self, unique_id: int, rng: random.Random) -> str:
        raise NotImplementedError

    def __call__(self, unique_id: int, rng: random.Random) -> str:
        return self.generate(unique_id, rng)


class Constant(ValueGenerator):
    """Low-cardinality literal shared by every record of every iteration."""

    def __init__(self, value: str):
        self.value = value

    def generate(self, unique_id, rng):
        return self.value

    def __repr__(self):
        return f"Constant({self.value!r})"


class UniqueIdTemplate(ValueGenerator):
    """Cardinality-bearing value, e.g. 'prometheus-k8s-{id}'."""

    def __init__(self, template: str):
        if "{id}" not in template:
            raise ValueError(f"Template '{template}' must contain '{{id}}'.")
        self.template = template

    def generate(self, unique_id, rng):
        return self.template.format(id=unique_id)

    def __repr__(self):
        return f"UniqueIdTemplate({self.template!r})"


class RandomString(ValueGenerator):
    """prefix + random [a-z0-9] string, drawn fresh per record."""

    def __init__(self, length: int, prefix: str = ""):
        self.length = length
        self.prefix = prefix

    def generate(self, unique_id, rng):
        return self.prefix + random_string(self.length, rng)

    def __repr__(self):
        return f"RandomString({self.length}, prefix={self.prefix!r})"


class RandomOctet(ValueGenerator):
    """Template with a random 0..255 integer, e.g. a host IP segment."""

    def __init__(self, template: str):
        self.template = template

    def generate(self, unique_id, rng):
        return self.template.format(octet=rng.randint(0, 255))


class UuidLike(ValueGenerator):
    def generate(self, unique_id, rng):
        return uuid_like(rng)
