import argparse
import logging
import sys

from pydantic import ValidationError

from loadgen.core.config import Settings, settings
from loadgen.core.runner import run
from loadgen.scenarios.registry import SCENARIOS, get_scenario

OVERRIDES = {
    "vus": "VUS",
    "iterations": "ITERATIONS",
    "base_url": "BASE_URL",
    "tenant_id": "TENANT_ID",
    "batch_size": "BATCH_SIZE",
    "field_count": "FIELD_COUNT",
    "timeout_ms": "TIMEOUT_MS",
    "sleep": "SLEEP_SECONDS",
}


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return number


def build_parser():
    parser = argparse.ArgumentParser(description="Push synthetic Kubernetes logs to an ingestion backend")
    parser.add_argument("scenario", choices=sorted(SCENARIOS), help="Target backend")
    parser.add_argument("--vus", type=positive_int, help="Concurrent virtual users")
    parser.add_argument("--iterations", type=positive_int, help="Iterations per virtual user")
    parser.add_argument("--base-url", help="Ingestion endpoint root")
    parser.add_argument("--tenant-id", help="Tenant sent as X-Scope-OrgID (loki)")
    parser.add_argument("--batch-size", type=positive_int, help="Records per iteration")
    parser.add_argument("--field-count", type=int, help="fieldN pairs per log line")
    parser.add_argument("--timeout-ms", type=positive_int, help="Per-request timeout")
    parser.add_argument("--sleep", type=float, help="Seconds to pause after each iteration")
    parser.add_argument("--dry-run", action="store_true", help="Build one request and print its size, send nothing")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    update = {
        key: getattr(args, attr)
        for attr, key in OVERRIDES.items()
        if getattr(args, attr) is not None
    }
    try:
        # CLI values go through the same field limits as env values
        config = Settings(**{**settings.model_dump(), **update})
    except ValidationError as e:
        parser.error(str(e))
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    scenario = get_scenario(args.scenario, config)

    if args.dry_run:
        request = scenario.request(scenario.context(1, 0))
        print(f"🧪 {scenario.name}: POST {request.url}")
        print(f"   headers : {sorted(request.headers)}")
        print(f"   body    : {len(request.body)} bytes")
        return 0

    print(f"🚀 Starting LOAD TEST against {scenario.base_url}")
    print(f"Scenario  : {scenario.name}")
    print(f"VUs       : {scenario.vus}")
    print(f"Iterations: {scenario.iterations} per VU")
    print("-----------------------------------")

    summary = run(scenario)

    print("\n✅ ================= RESULTS =================")
    for check in summary.checks.values():
        print(f"{check.name:<18}: {check.passes} passed, {check.fails} failed")
    print(f"Iterations        : {summary.iterations}")
    print(f"Total Time        : {summary.elapsed_seconds:.2f} seconds")
    print("============================================")

    return 1 if summary.failed else 0


if __name__ == "__main__":
    sys.exit(main())
