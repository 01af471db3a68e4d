#!/usr/bin/env python3
"""
AnimLib - Main Entry Point

Extracts raw skeletal animations from GLTF/GLB assets.
"""

import sys

from src.animlib.cli import main

if __name__ == "__main__":
    sys.exit(main())
