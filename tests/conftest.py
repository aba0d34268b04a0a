"""
Pytest fixtures for gitm tests.
"""

import os
import subprocess
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path for gitm imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment
os.environ["GITM_DATA_PATH"] = "/tmp/gitm_test_data"

from gitm.models import Author, Commit  # noqa: E402
from gitm.patch import parse_patch  # noqa: E402


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


@pytest.fixture
def temp_git_repo(temp_dir: Path) -> Path:
    """Create a temporary git repository with one commit by Test User."""
    git(temp_dir, "init")
    git(temp_dir, "config", "user.email", "test@test.com")
    git(temp_dir, "config", "user.name", "Test User")
    git(temp_dir, "config", "commit.gpgsign", "false")

    test_file = temp_dir / "README.md"
    test_file.write_text("# Test Repo\n")
    git(temp_dir, "add", ".")
    git(temp_dir, "commit", "-m", "Initial commit")

    return temp_dir


SAMPLE_DIFF = """diff --git a/app.py b/app.py
index 83db48f..bf269f4 100644
--- a/app.py
+++ b/app.py
@@ -1,3 +1,3 @@ def main():
 import os
-print("hello")
+print("hello world")
 x = 1
diff --git a/notes.md b/notes.md
new file mode 100644
index 0000000..3b18e51
--- /dev/null
+++ b/notes.md
@@ -0,0 +1,2 @@
+-- first
+second"""


@pytest.fixture
def sample_diff() -> str:
    """Two-file unified diff as printed by git log --patch."""
    return SAMPLE_DIFF


def make_commit(
    sha: str,
    title: str = "",
    body: str = "",
    author: str = "Ada Lovelace",
    date: datetime = datetime(2023, 1, 1, tzinfo=timezone.utc),
    diff: str = "",
) -> Commit:
    return Commit(
        author=Author(name=author),
        date=date,
        title=title,
        body=body,
        sha=sha,
        patch=parse_patch(diff),
    )


@pytest.fixture
def commit_factory():
    """Factory for Commit records with sensible defaults."""
    return make_commit
