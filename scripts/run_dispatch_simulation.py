import csv
import logging
import os
import time

from dispatch.dispatcher import Dispatcher
from dispatch.policy import policy_from_env
from simulation.config import load_simulation_config
from simulation.loader import load_scenario
from simulation.world import World


def run_simulation():
    config = load_simulation_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("=== STARTING END-TO-END DISPATCH SIMULATION ===")

    # Resolve paths relative to the repo root, wherever the user runs the script from.
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    scenario_dir = config.scenario_dir
    if not os.path.isabs(scenario_dir):
        scenario_dir = os.path.join(base_dir, scenario_dir)

    # 1. Load Data
    scenario = load_scenario(scenario_dir)
    print(f"Loaded {len(scenario.buildings)} Buildings, {len(scenario.vehicles)} Vehicles "
          f"and {len(scenario.people)} People.\n")

    # 2. Configure System
    policy = policy_from_env()
    world = World(
        buildings=scenario.buildings,
        vehicles=scenario.vehicles,
        people=scenario.people,
        dispatcher=Dispatcher(policy=policy),
    )

    # 3. Run the tick loop
    print(f"Running up to {config.ticks} ticks (pooling {'on' if policy.enable_pooling else 'off'})...")
    start_time = time.time()
    reports = world.run(config.ticks)
    print(f"Simulated {len(reports)} ticks in {time.time() - start_time:.2f}s.\n")

    # 4. Event log
    output_path = os.path.join(base_dir, config.results_path)
    with open(output_path, "w", newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["tick", "event", "vehicle", "person", "target_x", "target_y", "trip_distance"])
        for report in reports:
            for event in report.events:
                target_x, target_y = event.target if event.target else ("", "")
                writer.writerow([
                    report.tick,
                    event.kind.value,
                    event.vehicle_name,
                    event.person_name or "",
                    target_x,
                    target_y,
                    "" if event.metric is None else event.metric,
                ])

    metrics_path = os.path.join(base_dir, config.metrics_path)
    world.metrics.save_csv(metrics_path)

    summary = world.metrics.summary()
    stats = world.roster.stats()

    print("=== SIMULATION COMPLETE ===")
    print(f"Delivered by vehicle:  {summary.get('delivered_by_vehicle', 0)}")
    print(f"Arrived on foot:       {summary.get('delivered_on_foot', 0)}")
    print(f"Late deliveries:       {summary.get('late', 0)}")
    print(f"Assignments:           {summary['assigned_total']}")
    print(f"Pooled riders:         {summary['pooled_total']}")
    print(f"Peak waiting:          {summary['peak_waiting']}")
    print(f"Still active/pending:  {stats.active_count}/{stats.pending_count}")
    print(f"Events written to '{output_path}', metrics to '{metrics_path}'.")

if __name__ == "__main__":
    run_simulation()
