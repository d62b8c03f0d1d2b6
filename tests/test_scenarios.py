import json
import random

import pytest

from loadgen.core.config import Settings
from loadgen.core.runner import run, run_vu
from loadgen.scenarios.registry import SCENARIOS, get_scenario


class FakeClient:
    """Stands in for IngestClient; answers with a scripted list of statuses."""

    instances = []

    def __init__(self, settings, statuses=None):
        self.statuses = list(statuses or [])
        self.requests = []
        self.closed = False
        FakeClient.instances.append(self)

    def post(self, url, body, headers=None):
        self.requests.append((url, body, headers))
        status = self.statuses.pop(0) if self.statuses else 200
        return status, 0.001

    def close(self):
        self.closed = True


def test_registry_and_defaults():
    assert set(SCENARIOS) == {"openobserve", "victorialogs", "loki"}

    openobserve = get_scenario("openobserve", Settings())
    assert (openobserve.vus, openobserve.iterations, openobserve.expected_status) == (50, 2000, 200)
    assert openobserve.url == "http://localhost:5080/api/default/quickstart1/_json"

    victorialogs = get_scenario("victorialogs", Settings())
    assert (victorialogs.vus, victorialogs.iterations, victorialogs.expected_status) == (250, 2000, 204)
    assert victorialogs.url == "http://localhost:9428/insert/loki/api/v1/push"

    loki = get_scenario("loki", Settings())
    assert (loki.vus, loki.iterations, loki.sleep) == (1, 1, 1.0)


def test_unknown_scenario():
    with pytest.raises(KeyError, match="Known: loki, openobserve, victorialogs"):
        get_scenario("elasticsearch", Settings())


def test_settings_override_executor_shape():
    scenario = get_scenario("openobserve", Settings(VUS=3, ITERATIONS=4, SLEEP_SECONDS=0))
    assert (scenario.vus, scenario.iterations, scenario.sleep) == (3, 4, 0)
    assert scenario.context(2, 1).unique_id == 5


def test_openobserve_request():
    scenario = get_scenario("openobserve", Settings(BATCH_SIZE=2, BASE_URL="http://o2:5080/"))
    request = scenario.request(scenario.context(1, 0), random.Random())

    assert request.url == "http://o2:5080/api/default/quickstart1/_json"
    assert request.headers["Authorization"].startswith("Basic ")
    body = json.loads(request.body)
    assert isinstance(body, list) and len(body) == 2
    assert body[0]["kubernetes.pod_name"] == "prometheus-k8s-0"


def test_victorialogs_request():
    scenario = get_scenario("victorialogs", Settings(BATCH_SIZE=2))
    request = scenario.request(scenario.context(2, 3))

    body = json.loads(request.body)
    assert len(body["streams"]) == 2
    assert body["streams"][0]["stream"]["kubernetes_pod_name"] == "prometheus-k8s-2003"
    assert "Authorization" not in request.headers


def test_loki_request_carries_tenant():
    settings = Settings(LOKI_STREAMS=2, LOKI_MIN_BATCH_BYTES=1000, LOKI_MAX_BATCH_BYTES=2000)
    scenario = get_scenario("loki", settings)
    request = scenario.request(scenario.context(1, 0))

    assert request.url == "http://localhost:9428/insert/loki/api/v1/push"
    assert request.headers == {"X-Scope-OrgID": "42"}
    assert len(json.loads(request.body)["streams"]) == 2


def test_run_vu_keeps_going_after_failed_check():
    scenario = get_scenario("victorialogs", Settings(BATCH_SIZE=1, ITERATIONS=4, SLEEP_SECONDS=0))

    result = run_vu(scenario, vu=1, client_factory=lambda s: FakeClient(s, statuses=[204, 500, 0, 204]))

    client = FakeClient.instances[-1]
    assert len(client.requests) == 4
    assert client.closed
    assert (result.name, result.passes, result.fails) == ("status is 204", 2, 2)


def test_run_vu_uses_distinct_unique_ids():
    scenario = get_scenario("openobserve", Settings(BATCH_SIZE=1, ITERATIONS=3, SLEEP_SECONDS=0))
    run_vu(scenario, vu=2, client_factory=FakeClient)

    pods = [json.loads(body)[0]["kubernetes.pod_name"] for _, body, _ in FakeClient.instances[-1].requests]
    assert pods == ["prometheus-k8s-3", "prometheus-k8s-4", "prometheus-k8s-5"]


def test_run_merges_all_vus():
    scenario = get_scenario("openobserve", Settings(BATCH_SIZE=1, VUS=3, ITERATIONS=2, SLEEP_SECONDS=0))

    summary = run(scenario, client_factory=FakeClient)

    assert summary.scenario == "openobserve"
    assert summary.iterations == 6
    check = summary.checks["status is 200"]
    assert (check.passes, check.fails) == (6, 0)
    assert not summary.failed
