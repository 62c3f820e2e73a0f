#!/usr/bin/env python3
"""
run.py - Main entry point for gravity Connect Four

    Examples:

    # Play against the heuristic AI (gravity flips after every turn)
    python run.py play

    # Two human players, gravity only flips on request
    python run.py play --ai none --no-auto-gravity

    # Play with detailed logging and no settle pause
    python run.py --debug-level debug play --delay 0

    # Watch ten AI-vs-AI games, printing only the results
    python run.py demo --games 10 --quiet --seed 7

    # Benchmark the rules engine with 5000 iterations
    python run.py benchmark --iterations 5000
"""

import sys

from gravity4.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
