#Explicit state machines for people (pickup status) and vehicles.
