"""scenes — pygame scenes and their drawing helpers.

Submodules
----------
escape_scene   EscapeScene — the playable level, HUD and outcome banner
drawing        Alpha cone / ring / banner helpers
"""
