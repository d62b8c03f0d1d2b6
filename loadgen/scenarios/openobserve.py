# loadgen/scenarios/openobserve.py

from loadgen.core.transport import basic_auth
from loadgen.scenarios.base import PushRequest, Scenario


class OpenObserveScenario(Scenario):
    """Flat JSON array of records to the OpenObserve `_json` bulk endpoint."""

    name = "openobserve"
    expected_status = 200
    vus = 50
    iterations = 2000
    default_base_url = "http://localhost:5080"

    def __init__(self, settings):
        super().__init__(settings)
        self.url = (
            f"{self.base_url}/api/{settings.OPENOBSERVE_ORG}/{settings.OPENOBSERVE_STREAM}/_json"
        )
        self.headers = {
            "Authorization": basic_auth(settings.OPENOBSERVE_USER, settings.OPENOBSERVE_PASSWORD),
        }

    def request(self, ctx, rng=None):
        batch = self.generator.flat_batch(ctx, rng)
        return PushRequest(self.url, self.generator.serialize(batch), dict(self.headers))
