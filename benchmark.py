# building-tour-solver/benchmark.py
"""
Scaling benchmark for the exact building tour solver.
Runs random instances of growing size under different parallelism
settings and writes CSV, JSON and Markdown summaries to results/.
"""

import argparse
import csv
import json
import logging
import os
import shutil
from datetime import datetime

from tour_solver import utils
from tour_solver.io import generate_locations
from tour_solver.permutation import count_orderings
from tour_solver.solver import TourSolver

# Define all test scenarios
SCENARIOS = [
    {"name": "Small_6", "locations": 6, "seed": 1},
    {"name": "Small_8", "locations": 8, "seed": 2},
    {"name": "Medium_9", "locations": 9, "seed": 3},
    {"name": "Medium_10", "locations": 10, "seed": 4},
]

LARGE_SCENARIOS = [
    {"name": "Large_11", "locations": 11, "seed": 5},
]

# (label, max_parallelism, backend)
CONFIGURATIONS = [
    ("single_thread", 1, "thread"),
    ("threads", None, "thread"),
    ("processes", None, "process"),
]

CSV_KPIS = [
    "locations",
    "threads_used",
    "waves",
    "tours_evaluated",
    "best_duration",
    "search_ms",
    "total_ms",
    "tours_per_second",
    "speedup_vs_single",
]


def run_scenario(scenario: dict, configurations: list = None) -> dict:
    """Run all configurations on a single scenario and return results."""
    if configurations is None:
        configurations = CONFIGURATIONS

    print(f"\n{'='*60}")
    print(f"SCENARIO: {scenario['name']}")
    print(f"Locations: {scenario['locations']}  "
          f"(tours per partition: {count_orderings(scenario['locations']):,})")
    print(f"{'='*60}")

    locations = generate_locations(scenario["locations"], seed=scenario["seed"])

    scenario_results = {
        "scenario": scenario["name"],
        "locations": scenario["locations"],
        "seed": scenario["seed"],
        "configurations": {},
    }

    for label, parallelism, backend in configurations:
        print(f"\n  Running {label.upper()}...")
        solver = TourSolver(max_parallelism=parallelism, backend=backend)
        result = solver.solve(locations)

        search_seconds = result.search_ms / 1000
        scenario_results["configurations"][label] = {
            "locations": scenario["locations"],
            "threads_used": result.threads_used,
            "waves": result.waves,
            "tours_evaluated": result.tours_evaluated,
            "best_route": result.best.route if result.best else None,
            "best_duration": result.best.duration if result.best else None,
            "search_ms": round(result.search_ms, 2),
            "total_ms": round(result.total_ms, 2),
            "tours_per_second": round(result.tours_evaluated / search_seconds) if search_seconds > 0 else 0,
        }

        print(f"    ✓ {label}: duration {result.best.duration if result.best else 'N/A'}, "
              f"{utils.format_elapsed_ms(result.search_ms)}, {result.threads_used} per wave")

    return scenario_results


def calculate_speedups(results: dict, baseline_key: str = "single_thread") -> dict:
    """Speedup of each configuration relative to the single-thread run."""
    configurations = results["configurations"]
    if baseline_key not in configurations:
        return results

    baseline_ms = configurations[baseline_key]["search_ms"]
    baseline_duration = configurations[baseline_key]["best_duration"]

    for label, data in configurations.items():
        data["speedup_vs_single"] = round(baseline_ms / data["search_ms"], 2) if data["search_ms"] > 0 else 0
        # Every configuration must agree on the optimum
        data["agrees_with_single"] = data["best_duration"] == baseline_duration

    return results


def save_master_csv(all_results: list, output_dir: str, timestamp: str) -> str:
    """One row per (scenario, configuration)."""
    filename = f"{output_dir}/MASTER_DATA_{timestamp}.csv"

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["scenario", "configuration"] + CSV_KPIS + ["agrees_with_single"])
        for result in all_results:
            for label, data in result["configurations"].items():
                writer.writerow(
                    [result["scenario"], label]
                    + [data.get(kpi, "") for kpi in CSV_KPIS]
                    + [data.get("agrees_with_single", "")]
                )

    print(f"✓ Saved master data: {filename}")
    return filename


def generate_markdown_report(all_results: list, output_dir: str, timestamp: str) -> str:
    """Human-readable summary table."""
    filename = f"{output_dir}/REPORT_{timestamp}.md"

    with open(filename, "w") as f:
        f.write("# Building Tour Solver Benchmark\n\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
        f.write("| Scenario | Configuration | Per Wave | Tours | Search | Speedup | Optimum |\n")
        f.write("|---|---|---|---|---|---|---|\n")

        for result in all_results:
            for label, data in result["configurations"].items():
                f.write(
                    f"| {result['scenario']} | {label} | {data['threads_used']} | "
                    f"{data['tours_evaluated']:,} | {utils.format_elapsed_ms(data['search_ms'])} | "
                    f"{data.get('speedup_vs_single', 'N/A')}x | {data['best_duration']} |\n"
                )

        disagreements = [
            (r["scenario"], label)
            for r in all_results
            for label, data in r["configurations"].items()
            if data.get("agrees_with_single") is False
        ]
        f.write("\n")
        if disagreements:
            f.write(f"**WARNING:** optimum differs from single-thread run in {disagreements}\n")
        else:
            f.write("All configurations found the same optimum.\n")

        f.write("\n---\n")
        f.write("*Report generated by benchmark.py*\n")

    print(f"✓ Saved report: {filename}")
    return filename


def main():
    """Run the full benchmark suite."""
    parser = argparse.ArgumentParser(description="Building tour solver benchmark")
    parser.add_argument("--large", action="store_true", help="Include the 11-location scenario")
    parser.add_argument("--output-dir", default="results", help="Directory for result files")
    args = parser.parse_args()

    utils.configure_logging()
    logging.getLogger("tour_solver").setLevel(logging.WARNING)

    print("=" * 60)
    print("BUILDING TOUR SOLVER BENCHMARK SUITE")
    print("=" * 60)

    os.makedirs(args.output_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    scenarios = SCENARIOS + (LARGE_SCENARIOS if args.large else [])
    all_results = []
    for scenario in scenarios:
        result = calculate_speedups(run_scenario(scenario))
        all_results.append(result)

    print(f"\n{'='*60}")
    print("GENERATING SUMMARY FILES")
    print("=" * 60)

    save_master_csv(all_results, args.output_dir, timestamp)
    report = generate_markdown_report(all_results, args.output_dir, timestamp)

    json_file = f"{args.output_dir}/benchmark_{timestamp}.json"
    with open(json_file, "w") as f:
        json.dump(all_results, f, indent=2, default=str)
    print(f"✓ Saved JSON: {json_file}")

    shutil.copy(report, f"{args.output_dir}/LATEST_REPORT.md")
    print("\n✓ Updated LATEST files")

    print(f"\n{'='*60}")
    print("BENCHMARK COMPLETE")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
