"""logic — Game systems package.

Subpackages
-----------
targeting/  — lock-on core: snapshots, nearest / pointer selection,
              cycling, range checks, target state, attack gating

Top-level modules
-----------------
tick            — per-frame orchestrator (clock, movement, targeting pass)
entity_factory  — player / enemy creation from tuning presets
damage          — damage application and the death sequence
input_manager   — raw input → intent and targeting-action mapping
"""
