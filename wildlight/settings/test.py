# pylint: disable=W0401,W0614
import tempfile
from pathlib import Path

from .base import *

# Individual tests point these at tmp_path; the defaults only keep stray writes out of the repo
_scratch = Path(tempfile.mkdtemp(prefix="wildlight-tests-"))
WILDLIGHT_DATA_DIR = _scratch / "data"
WILDLIGHT_UPLOAD_DIR = _scratch / "uploads"
WILDLIGHT_PREPARE_STORE = False

WILDLIGHT_ADMIN_PASSWORD = "test-password"
WILDLIGHT_LIKE_SALT = "test-salt"
