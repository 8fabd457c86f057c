import os
import shutil
import tempfile

import pytest


@pytest.fixture(scope="session", autouse=True)
def isolate_user_config():
    """Point prmate at an empty configuration directory.

    Tests expect the built-in defaults, so a real ``~/.prmate/config.json``
    must not leak into them. The previous value of the override variable
    is restored afterwards.
    """
    config_dir = tempfile.mkdtemp(prefix="prmate_config_")
    previous = os.environ.get("PRMATE_CONFIG_DIR")
    os.environ["PRMATE_CONFIG_DIR"] = config_dir
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop("PRMATE_CONFIG_DIR", None)
        else:
            os.environ["PRMATE_CONFIG_DIR"] = previous
        shutil.rmtree(config_dir, ignore_errors=True)
