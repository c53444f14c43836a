"""
Mind Map Viewer - Main Runner Script
====================================

Run any entry point from the project root.
Handles Python path setup automatically.

Usage:
    python run.py view map.json      # Open a map in the interactive viewer
    python run.py export map.json out.png   # Written under OUTPUT_DIR
    python run.py sample             # Open the built-in sample map
    python run.py test               # Smoke-test imports, layout and logging
"""

import sys
import os

# Add project root to Python path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)


def main():
    """Main entry point"""

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    command = sys.argv[1].lower()
    args = sys.argv[2:]

    try:
        if command == 'view':
            from scripts.view_mindmap import main as view_main
            sys.exit(view_main(args))

        elif command == 'export':
            from scripts.view_mindmap import main as view_main
            if len(args) < 2:
                print("Usage: python run.py export <map.json> <out.png|out.svg>")
                sys.exit(1)
            sys.exit(view_main([args[0], '--export', args[1]] + args[2:]))

        elif command == 'sample':
            from scripts.view_mindmap import main as view_main
            sys.exit(view_main(['--sample'] + args))

        elif command == 'test':
            print("Running system checks...\n")
            from mindmap_viewer.data.samples import build_sample_map
            from mindmap_viewer.layout.radial import compute_layout
            from mindmap_viewer.utils.log import get_logger
            print("[OK] All modules imported successfully")

            print("\nTesting layout...")
            mind_map = build_sample_map()
            positions = compute_layout(mind_map.nodes, 1200, 800)
            print(f"[OK] Positioned {len(positions)} of {len(mind_map.nodes)} nodes")

            print("\nTesting logging...")
            logger = get_logger(__name__)
            logger.info("Test log message", test_value=123)
            print("[OK] Logging system works")

            print("\nAll checks passed!")

        else:
            print(f"Unknown command: {command}")
            print(__doc__)
            sys.exit(1)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
