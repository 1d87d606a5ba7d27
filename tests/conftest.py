import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from msgc.styles.registry import reset_registry
from msgc.template.cache import get_template_cache

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture(autouse=True)
def _fresh_registry():
    # Реестр стилей и кэш шаблонов живут на уровне процесса
    reset_registry()
    get_template_cache().clear()
    yield
    reset_registry()
    get_template_cache().clear()


def run_cli(cwd: Path, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_ROOT) + os.pathsep + env.get("PYTHONPATH", "")
    env["PYTHONIOENCODING"] = "utf-8"
    env.pop("MSGC_CAPABILITY", None)
    env.pop("MSGC_DEBUG", None)
    return subprocess.run(
        [sys.executable, "-m", "msgc.cli", *args],
        cwd=cwd, env=env, capture_output=True, text=True, encoding="utf-8", input=stdin,
    )


def jload(s: str):
    return json.loads(s)
