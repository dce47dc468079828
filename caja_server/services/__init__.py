"""Business logic invoked by the routers; every call takes the owner explicitly."""
