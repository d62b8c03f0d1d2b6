# loadgen/scenarios/loki.py

from loadgen.modules.batch import BatchGenerator
from loadgen.modules.loki_push import LokiPushBuilder, push_url
from loadgen.scenarios.base import PushRequest, Scenario


class LokiScenario(Scenario):
    """
    Parameterized push: LOKI_STREAMS streams carrying between
    LOKI_MIN_BATCH_BYTES and LOKI_MAX_BATCH_BYTES of log lines,
    scoped to a tenant with X-Scope-OrgID.
    """

    name = "loki"
    expected_status = 204
    vus = 1
    iterations = 1
    sleep = 1.0
    default_base_url = "http://42@localhost:9428/insert"

    def __init__(self, settings):
        super().__init__(settings)
        self.builder = LokiPushBuilder(settings, self.base_url)
        self.url = push_url(self.base_url)

    def request(self, ctx, rng=None):
        push = self.builder.build(ctx.vu, rng)
        headers = {"X-Scope-OrgID": self.builder.tenant_for(ctx.vu)}
        return PushRequest(self.url, BatchGenerator.serialize(push), headers)
