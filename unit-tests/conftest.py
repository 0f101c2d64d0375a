import sys
from pathlib import Path

# Insert project root so the top-level rtnet package is importable without installing
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
