#!/usr/bin/env python3
"""
Convenience shim to run Showfinder from a source checkout.
Usage: python showfinder.py [--verify|--help|--config PATH] "Show Name"
"""

from showfinder.cli import main


if __name__ == "__main__":
    main()
