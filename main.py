import os
import sys

# Add src/ to path for new directory structure
src_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if os.path.exists(src_dir):
    sys.path.insert(0, src_dir)

from hello_core.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
