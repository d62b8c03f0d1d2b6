# loadgen/core/runner.py

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Optional

from pydantic import BaseModel

from loadgen.core.config import Settings
from loadgen.core.transport import IngestClient
from loadgen.scenarios.base import Scenario

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], IngestClient]


class CheckResult(BaseModel):
    name: str
    passes: int = 0
    fails: int = 0

    def record(self, ok: bool):
        if ok:
            self.passes += 1
        else:
            self.fails += 1

    def merge(self, other: "CheckResult") -> "CheckResult":
        return CheckResult(name=self.name, passes=self.passes + other.passes, fails=self.fails + other.fails)


class RunSummary(BaseModel):
    scenario: str
    vus: int
    iterations: int  # total across all VUs
    checks: Dict[str, CheckResult]
    elapsed_seconds: float

    @property
    def failed(self) -> bool:
        return any(c.fails for c in self.checks.values())


def run_vu(
    scenario: Scenario,
    vu: int,
    client_factory: ClientFactory = IngestClient,
    rng: Optional[random.Random] = None,
) -> CheckResult:
    """
    Runs every iteration of one virtual user. Each VU owns its random
    source and HTTP session; a failed check is recorded and the loop goes on.
    """
    rng = rng or random.Random()
    client = client_factory(scenario.settings)
    result = CheckResult(name=scenario.check_name)
    try:
        for iteration in range(scenario.iterations):
            ctx = scenario.context(vu, iteration)
            request = scenario.request(ctx, rng)
            status, latency = client.post(request.url, request.body, request.headers)
            result.record(scenario.check(status))
            logger.debug(f"vu={vu} iter={iteration} id={ctx.unique_id} status={status} latency={latency:.3f}s")

            if scenario.sleep:
                time.sleep(scenario.sleep)
    finally:
        client.close()
    return result


def run(scenario: Scenario, client_factory: ClientFactory = IngestClient) -> RunSummary:
    """per-vu-iterations executor: `vus` threads, each running `iterations` times."""
    logger.info(f"🚀 Starting {scenario.name}: {scenario.vus} VUs x {scenario.iterations} iterations")
    start_time = time.time()

    with ThreadPoolExecutor(max_workers=scenario.vus, thread_name_prefix=f"vu-{scenario.name}") as pool:
        futures = [
            pool.submit(run_vu, scenario, vu, client_factory)
            for vu in range(1, scenario.vus + 1)
        ]
        total = CheckResult(name=scenario.check_name)
        for future in futures:
            total = total.merge(future.result())

    elapsed = time.time() - start_time
    logger.info(f"✅ {scenario.name} finished in {elapsed:.2f}s ({total.passes} passed, {total.fails} failed)")
    return RunSummary(
        scenario=scenario.name,
        vus=scenario.vus,
        iterations=scenario.vus * scenario.iterations,
        checks={total.name: total},
        elapsed_seconds=elapsed,
    )
