"""Entry point for running the leaderboard viewer as a module.

Usage:
    python -m jornet
"""

from jornet.viewer import main

if __name__ == "__main__":
    main()
