"""simulation — The stealth-escape world as one object.

Submodules
----------
world_sim   EscapeSim, create_sim — build, step, reset, read views
snapshot    Frozen per-frame views handed to the host
"""
