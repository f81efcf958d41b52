#!/usr/bin/env python3
"""
Minefield - terminal entry point.

Usage:
    python main.py [--difficulty {beginner,intermediate,expert}]
    python main.py --width W --height H --mines N [--seed S]
"""
from src.minefield.cli import main


if __name__ == "__main__":
    main()
