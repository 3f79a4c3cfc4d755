import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Tests build caches from defaults; ignore overrides from a developer's shell.
for _name in list(os.environ):
    if _name.upper().startswith("PREVIEW_CACHE_"):
        del os.environ[_name]
