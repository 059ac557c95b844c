"""
Photoelectric package entry point.

Allows running the simulator as a module:
    python -m photoelectric --sweep
    python -m photoelectric --voltage -0.5 --material Na
"""

from .main import main

if __name__ == "__main__":
    main()
