# loadgen/modules/batch.py

import json
import random
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from loadgen.core.config import Settings
from loadgen.modules.generators import json_line, logfmt_line, nanosecond_timestamp
from loadgen.modules.schema import KUBERNETES_SCHEMA, RecordSchema

Record = Dict[str, Any]


class IterationContext(BaseModel):
    vu: int = Field(..., ge=1)  # 1-based, like the harness reports it
    iteration: int = Field(..., ge=0)
    iterations_per_vu: int = Field(..., ge=1)

    @property
    def unique_id(self) -> int:
        # Distinct for every (vu, iteration) pair of a run
        return (self.vu - 1) * self.iterations_per_vu + self.iteration


def unique_id(vu: int, iteration: int, iterations_per_vu: int) -> int:
    return IterationContext(vu=vu, iteration=iteration, iterations_per_vu=iterations_per_vu).unique_id


class BatchGenerator:
    """
    Builds one batch of synthetic Kubernetes log records per iteration.

    Two wire shapes are produced from the same schema:
      * flat:  [{"kubernetes.pod_name": ..., "log": "ts=... field0=...", "stream": ...}, ...]
      * loki:  {"streams": [{"stream": {labels}, "values": [["<ns>", "<json line>"]]}, ...]}

    The generator keeps no state between calls and performs no I/O.
    """

    def __init__(self, settings: Settings, schema: Optional[RecordSchema] = None):
        self.batch_size = settings.BATCH_SIZE
        self.field_count = settings.FIELD_COUNT
        self.schema = schema or KUBERNETES_SCHEMA

    def flat_record(self, ctx: IterationContext, rng: random.Random) -> Record:
        fields = self.schema.render(ctx.unique_id, rng)
        stream = fields.pop("stream", None)
        fields["log"] = logfmt_line(rng, self.field_count)
        if stream is not None:
            fields["stream"] = stream
        return fields

    def stream_entry(self, ctx: IterationContext, rng: random.Random) -> Record:
        timestamp = nanosecond_timestamp()
        return {
            "stream": self.schema.render(ctx.unique_id, rng, label_names=True),
            "values": [[timestamp, json_line(rng, self.field_count)]],
        }

    def flat_batch(self, ctx: IterationContext, rng: Optional[random.Random] = None) -> List[Record]:
        rng = rng or random.Random()
        return [self.flat_record(ctx, rng) for _ in range(self.batch_size)]

    def loki_batch(self, ctx: IterationContext, rng: Optional[random.Random] = None) -> Dict[str, List[Record]]:
        rng = rng or random.Random()
        return {"streams": [self.stream_entry(ctx, rng) for _ in range(self.batch_size)]}

    @staticmethod
    def serialize(batch: Union[List[Record], Dict[str, Any]]) -> bytes:
        """Compact JSON, matching what a JS client's JSON.stringify sends."""
        return json.dumps(batch, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
