import pandas as pd
import numpy as np

def generate_mock_people(num_people=60, buildings_file="sampledata/buildings.csv",
                         output_file="mock_people.csv", horizon_ticks=80):
    """
    Generates a stream of riders between the scenario's buildings.
    A few buildings are made much busier than the rest so several people share
    an origin at the same time, which is what gives the dispatcher pooling chances.
    """
    buildings = pd.read_csv(buildings_file)
    names = buildings["building_id"].astype(str).tolist()
    positions = {
        str(row.building_id): (int(row.x), int(row.y))
        for row in buildings.itertuples(index=False)
    }

    # 1. Skew origins towards "hub" buildings
    weights = np.random.uniform(0.5, 1.5, size=len(names))
    weights[: max(1, len(names) // 3)] *= 3
    weights = weights / weights.sum()

    data = []
    # 2. Generate people
    for person_index in range(num_people):
        origin = np.random.choice(names, p=weights)
        destination = np.random.choice([n for n in names if n != origin])

        ox, oy = positions[origin]
        dx, dy = positions[destination]
        trip = abs(ox - dx) + abs(oy - dy)

        # Deadline: the ride itself plus some slack, sometimes tight enough to force walking
        slack = int(np.random.randint(trip // 2, 2 * trip + 10))

        data.append({
            "person_id": f"p_{str(person_index+1).zfill(4)}",
            "origin": origin,
            "destination": destination,
            "time": trip + slack,
            "appear_tick": int(np.random.randint(0, horizon_ticks)),
        })

    # 3. Save to CSV (sorted by appearance so the roster scan order is stable)
    df = pd.DataFrame(data).sort_values(["appear_tick", "person_id"], kind="stable")
    df.to_csv(output_file, index=False)
    print(f"✅ Generated {num_people} people and saved to '{output_file}'")

    # Print a quick preview of pooling density
    print("\nTop 3 origins (Pooling Potential):")
    counts = df['origin'].value_counts().head(3)
    for name, count in counts.items():
        print(f"  {name}: {count} people")

if __name__ == "__main__":
    generate_mock_people(num_people=60)
