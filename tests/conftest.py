import sys
from pathlib import Path

# Put the repo root on sys.path so `import tmap` and `from tests...` resolve
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))
