"""logic — Game systems package.

Subpackages
-----------
ai/         — brain registry, guard patrol/chase brain, perception
              (line of sight, vision cone), steering

Top-level modules
-----------------
tick            — per-step system orchestrator
movement        — per-axis movement against the tile grid
player          — player controller (intent, stamina, key / door)
input_manager   — raw pygame keys → intents
"""
