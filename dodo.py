"""
Doit file to wrap development workflow commands for ghsync.
"""

import shutil
from pathlib import Path

from doit import task_params
from doit.tools import create_folder

PACKAGE = "ghsync"
TEST_DIR = "test"

OUT_PATH = Path("__out__")
BADGES_PATH = Path("badges")

# pytest results and coverage
JUNIT_XML = OUT_PATH / "test" / "junit.xml"
COV_PATH = OUT_PATH / "test" / "cov"
COV_XML = COV_PATH / "coverage.xml"

# mypy reports
MYPY_PATH = OUT_PATH / "analysis" / "mypy"


def _rmtree(path: Path):
    shutil.rmtree(path, ignore_errors=True)


def _cmd(*args: object) -> str:
    return " ".join(str(a) for a in args)


def task_pytest():
    """
    Run tests, writing JUnit and coverage reports.
    """
    return {
        "actions": [
            (create_folder, [COV_PATH]),
            _cmd(
                "pytest",
                f"--cov={PACKAGE}",
                "--cov-report=term-missing",
                f"--cov-report=html:{COV_PATH / 'html'}",
                f"--cov-report=xml:{COV_XML}",
                f"--junitxml={JUNIT_XML}",
            ),
        ],
        "targets": [JUNIT_XML, COV_XML],
        "clean": [(_rmtree, [COV_PATH.parent])],
        "verbosity": 2,
    }


def task_badges():
    """
    Generate test and coverage badges from latest pytest run.
    """
    badges = [
        ("tests", JUNIT_XML, BADGES_PATH / "tests.svg"),
        ("coverage", COV_XML, BADGES_PATH / "cov.svg"),
    ]

    return {
        "actions": [(create_folder, [BADGES_PATH])]
        + [_cmd("genbadge", kind, "-i", src, "-o", dst) for kind, src, dst in badges],
        "file_dep": [src for _, src, _ in badges],
        "targets": [dst for _, _, dst in badges],
    }


@task_params(
    [
        {
            "name": "check",
            "long": "check",
            "type": bool,
            "default": False,
            "help": "Only verify formatting, without modifying files",
        }
    ]
)
def task_format(check: bool):
    """
    Format sources with autoflake, isort, black and toml-sort.
    """
    sources = [PACKAGE, TEST_DIR, "dodo.py"]

    if check:
        actions = [
            _cmd("isort", "--check-only", *sources),
            _cmd("black", "--check", *sources),
            _cmd("toml-sort", "--check", "pyproject.toml"),
        ]
    else:
        actions = [
            _cmd(
                "autoflake",
                "--remove-all-unused-imports",
                "-i",
                "-r",
                *sources,
            ),
            _cmd("isort", *sources),
            _cmd("black", *sources),
            _cmd("toml-sort", "-i", "pyproject.toml"),
        ]

    return {
        "actions": actions,
        "verbosity": 2,
    }


def task_analysis():
    """
    Type check package with mypy, writing HTML and Cobertura reports.
    """
    return {
        "actions": [
            (create_folder, [MYPY_PATH]),
            _cmd(
                "mypy",
                "--html-report",
                MYPY_PATH / "html",
                "--cobertura-xml-report",
                MYPY_PATH / "xml",
                PACKAGE,
            ),
        ],
        "clean": [(_rmtree, [MYPY_PATH])],
        "verbosity": 2,
    }
