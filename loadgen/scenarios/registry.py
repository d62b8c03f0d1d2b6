# loadgen/scenarios/registry.py

from typing import Dict, Type

from loadgen.core.config import Settings
from loadgen.scenarios.base import Scenario
from loadgen.scenarios.loki import LokiScenario
from loadgen.scenarios.openobserve import OpenObserveScenario
from loadgen.scenarios.victorialogs import VictoriaLogsScenario

SCENARIOS: Dict[str, Type[Scenario]] = {
    cls.name: cls for cls in (OpenObserveScenario, VictoriaLogsScenario, LokiScenario)
}


def get_scenario(name: str, settings: Settings) -> Scenario:
    try:
        cls = SCENARIOS[name]
    except KeyError:
        raise KeyError(f"Unknown scenario '{name}'. Known: {', '.join(sorted(SCENARIOS))}") from None
    return cls(settings)
