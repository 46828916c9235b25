"""
CybORG Viz - Session client for CybORG cyber-defense game visualization.

The simulation itself runs on a remote game server. This package provides:
- The HTTP session transport (start, advance, replay a step, end)
- The session state machine driving a single game
- The graph view model holding the latest network snapshot
- A command-line front-end standing in for the AR controls
"""

__version__ = "0.1.0"
