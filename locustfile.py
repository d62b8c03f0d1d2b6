"""
Run the scenarios under locust instead of the built-in thread runner:

    locust -f locustfile.py OpenObserveUser --headless -u 50 -r 50

Each user takes the next VU index, runs the scenario's iteration count and stops.
"""
import itertools
import random

from locust import HttpUser, task
from locust.exception import StopUser

from loadgen.core.config import settings
from loadgen.scenarios.registry import SCENARIOS, get_scenario

_vu_counter = itertools.count(1)


class ScenarioUser(HttpUser):
    abstract = True
    scenario_name = ""

    def on_start(self):
        self.scenario = get_scenario(self.scenario_name, settings)
        self.vu = next(_vu_counter)
        self.iteration = 0
        self.rng = random.Random()
        self.client.headers.update({
            "Content-Type": "application/json",
            "User-Agent": settings.USER_AGENT,
        })

    def wait_time(self):
        return self.scenario.sleep

    @task
    def push(self):
        if self.iteration >= self.scenario.iterations:
            raise StopUser()

        ctx = self.scenario.context(self.vu, self.iteration)
        request = self.scenario.request(ctx, self.rng)
        with self.client.post(
            request.url,
            data=request.body,
            headers=request.headers,
            timeout=settings.timeout_seconds,
            name=self.scenario.name,
            catch_response=True,
        ) as response:
            if not self.scenario.check(response.status_code):
                response.failure(f"{self.scenario.check_name}: got {response.status_code}")
        self.iteration += 1


class OpenObserveUser(ScenarioUser):
    scenario_name = "openobserve"
    host = SCENARIOS["openobserve"].default_base_url


class VictoriaLogsUser(ScenarioUser):
    scenario_name = "victorialogs"
    host = SCENARIOS["victorialogs"].default_base_url


class LokiUser(ScenarioUser):
    scenario_name = "loki"
    host = SCENARIOS["loki"].default_base_url
