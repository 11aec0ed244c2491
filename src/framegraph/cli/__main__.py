"""
Entry point allowing: python -m framegraph.cli
"""

from .main import main

if __name__ == '__main__':
    import sys
    sys.exit(main())
