"""Test configuration ensuring the repository root is importable."""
import os
import sys
import tempfile
from pathlib import Path

# Keep test runs from writing into the project's logs directory
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="brevo-mailer-logs-"))

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
