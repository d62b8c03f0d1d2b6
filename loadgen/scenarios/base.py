# loadgen/scenarios/base.py

import random
from typing import Dict, NamedTuple, Optional

from loadgen.core.config import Settings
from loadgen.modules.batch import BatchGenerator, IterationContext


class PushRequest(NamedTuple):
    url: str
    body: bytes
    headers: Dict[str, str]


class Scenario:
    """
    One backend's iteration body plus its executor shape.
    Subclasses set the class attributes and implement request().
    """

    name: str = ""
    expected_status: int = 200
    vus: int = 1
    iterations: int = 1
    sleep: float = 0.0
    default_base_url: str = ""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.base_url = (settings.BASE_URL or self.default_base_url).rstrip("/")
        self.generator = BatchGenerator(settings)

        # Settings override the scenario's own executor shape
        if settings.VUS is not None:
            self.vus = settings.VUS
        if settings.ITERATIONS is not None:
            self.iterations = settings.ITERATIONS
        if settings.SLEEP_SECONDS is not None:
            self.sleep = settings.SLEEP_SECONDS

    @property
    def check_name(self) -> str:
        return f"status is {self.expected_status}"

    def context(self, vu: int, iteration: int) -> IterationContext:
        return IterationContext(vu=vu, iteration=iteration, iterations_per_vu=self.iterations)

    def request(self, ctx: IterationContext, rng: Optional[random.Random] = None) -> PushRequest:
        raise NotImplementedError

    def check(self, status: int) -> bool:
        return status == self.expected_status

    def __repr__(self):
        return f"<{type(self).__name__} {self.name} vus={self.vus} iterations={self.iterations}>"
