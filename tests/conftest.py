import sys
from pathlib import Path

import matplotlib

# Plots are written to files only.
matplotlib.use("Agg")

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
