import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path


@contextmanager
def managed_temp_dir(prefix: str, root: str = "tests/tmp"):
    base_tmp = Path(root)
    base_tmp.mkdir(parents=True, exist_ok=True)
    tmp_path = Path(tempfile.mkdtemp(prefix=f"{prefix}_", dir=base_tmp))
    try:
        yield tmp_path
    finally:
        shutil.rmtree(tmp_path, ignore_errors=True)
