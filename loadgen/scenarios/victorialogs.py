# loadgen/scenarios/victorialogs.py

from loadgen.modules.loki_push import push_url
from loadgen.scenarios.base import PushRequest, Scenario


class VictoriaLogsScenario(Scenario):
    """One Loki stream per record, pushed to VictoriaLogs' Loki-compatible API."""

    name = "victorialogs"
    expected_status = 204
    vus = 250
    iterations = 2000
    default_base_url = "http://localhost:9428/insert"

    def __init__(self, settings):
        super().__init__(settings)
        self.url = push_url(self.base_url)

    def request(self, ctx, rng=None):
        batch = self.generator.loki_batch(ctx, rng)
        return PushRequest(self.url, self.generator.serialize(batch), {})
