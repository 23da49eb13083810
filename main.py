# main.py - launch the study from a source checkout (same as `text-entry-study run`)

import sys

from text_entry_study.cli import main

if __name__ == "__main__":
    sys.exit(main())
