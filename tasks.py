"""
tasks.py
--------
Developer tasks, run with invoke:
    invoke precommit
    invoke delete-db
    invoke create | check | drill

Each task runs its commands in order and stops at the first one that
exits non-zero.
"""

from pathlib import Path

from invoke.exceptions import Exit
from invoke.tasks import task

from config import DB_PATH

PRECOMMIT_COMMANDS = (
    "pip check",
    "ruff format --check .",
    "ruff check --fix .",
    "deptry .",
    "pytest",
)
SAMPLE_CARDS = "test.md"
SAMPLE_COLLECTION = "test.md test_data/ science/"
REPEAT = "python main.py"


@task
def precommit(c):
    """Dependency check, format check, lint autofix, unused-dependency scan, tests."""
    for command in PRECOMMIT_COMMANDS:
        c.run(command)


@task
def delete_db(c, path=None):
    """Remove the local card database."""
    db_path = Path(path) if path else DB_PATH
    if not db_path.exists():
        raise Exit(f"rm: {db_path}: No such file or directory", code=1)
    db_path.unlink()
    print(f"Deleted {db_path}")


@task
def create(c):
    c.run(f"{REPEAT} create {SAMPLE_CARDS}", pty=True)


@task
def check(c):
    c.run(f"{REPEAT} check {SAMPLE_COLLECTION}")


@task
def drill(c):
    c.run(f"{REPEAT} drill {SAMPLE_COLLECTION}", pty=True)
