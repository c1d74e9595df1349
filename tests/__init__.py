import os
import tempfile

# Keep logs written during tests out of the user's real data folder. Must run before anything imports mci.
os.environ.setdefault("MCI_DATA_DIR", tempfile.mkdtemp(prefix="mci-tests-"))
