import csv
import random

def generate_mock_vehicles(filename="mock_vehicles.csv", count=5, grid_size=20):
    # Vehicles start scattered over the grid; file order is dispatch order.
    names = ["one", "two", "three", "four", "five"]

    with open(filename, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["vehicle_id", "x", "y"])

        for i in range(count):
            vehicle_id = names[i] if i < len(names) else f"VEH-{str(i+1).zfill(3)}"

            x = random.randint(0, grid_size - 1)
            y = random.randint(0, grid_size - 1)

            writer.writerow([vehicle_id, x, y])

    print(f"Successfully generated {count} mock vehicles into '{filename}'.")

if __name__ == "__main__":
    generate_mock_vehicles()
