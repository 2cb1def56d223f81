"""logic/ai — AI subpackage.

Modules
-------
brains      — brain registry + tick_ai dispatcher
guard       — patrol / chase state machine with suspicion and memory
perception  — line of sight, vision cone
steering    — velocity helpers
"""
