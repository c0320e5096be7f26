"""
Surprise - Prize reveal game engine

Sixteen sealed cases, elimination rounds, and a final keep-or-swap.
The engine provides:
- The game state machine and round scheduling
- A rigging engine that delivers an operator-chosen prize
- Per-round pacing of near-miss reveals
- Session persistence and an HTTP front-end API
"""

__version__ = "0.1.0"
