from riders.models import Person, PickupStatus

class PersonStateException(Exception):
    """Raised when an invalid pickup-status transition is attempted."""
    pass

def transition_person_to_committed(person: Person, vehicle_name: str) -> Person:
    """
    Called when the Assignment Selector picks this person for a vehicle.
    Commitment is permanent until pickup completes.
    """
    if person.status != PickupStatus.UNASSIGNED:
        raise PersonStateException(f"Cannot commit {person.name} to {vehicle_name} from {person.status.value}")

    person.status = PickupStatus.COMMITTED
    person.vehicle_name = vehicle_name
    return person

def transition_person_to_onboard(person: Person, vehicle_name: str) -> Person:
    """
    Called when a vehicle picks the person up.
    Either the vehicle they were committed to, or (pooling) straight from UNASSIGNED.
    """
    if person.status == PickupStatus.UNASSIGNED:
        pass
    elif person.status == PickupStatus.COMMITTED:
        if person.vehicle_name != vehicle_name:
            raise PersonStateException(
                f"{person.name} is committed to {person.vehicle_name}, not {vehicle_name}"
            )
    else:
        raise PersonStateException(f"Cannot board {person.name} from {person.status.value}")

    person.status = PickupStatus.ONBOARD
    person.vehicle_name = vehicle_name
    return person

def transition_person_to_delivered(person: Person) -> Person:
    """
    Called by the harness when the person reaches their destination,
    whether dropped by a vehicle or on foot.
    """
    if person.status == PickupStatus.DELIVERED:
        raise PersonStateException(f"{person.name} was already delivered")

    person.status = PickupStatus.DELIVERED
    return person
