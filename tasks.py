#!/usr/bin/env python
# -*- coding: utf-8 -*-
# mypy: ignore-errors
"""
Development scripts.

You need ``invoke`` installed to run them.
"""
import os

import invoke


ROOT = os.path.dirname(os.path.abspath(__file__))
PACKAGE = "src/gqlkit"
DEFAULT_TARGETS = f"{PACKAGE} tests"


def _join(*cmd):
    return " ".join(c for c in cmd if c)


@invoke.task()
def clean(ctx, full=False):
    """
    Remove artifacts and local caches.
    """
    with ctx.cd(ROOT):
        ctx.run('find src tests -type f -name "*.pyc" -delete')
        ctx.run('find src tests -type d -name "__pycache__" -delete')
        ctx.run('find . src tests -type f -path "*.egg-info*" -delete')

        if full:
            # Pass --full to get as close to a fresh state as possible.
            ctx.run(
                _join(
                    "rm",
                    "-rf ",
                    ".pytest_cache",
                    ".mypy_cache",
                    "junit*.xml",
                    "htmlcov*",
                    ".coverage*",
                    "dist",
                    "build",
                ),
            )


@invoke.task(iterable=["files"])
def test(ctx, bail=True, verbose=False, grep=None, files=None, junit=False):
    """
    Run test suite (using: py.test).

    You should be able to run pytest directly but this provides some useful
    shortcuts and defaults.
    """
    files = f"{PACKAGE} tests" if not files else " ".join(files)

    with ctx.cd(ROOT):
        ctx.run(
            _join(
                "py.test",
                "-c setup.cfg",
                "--exitfirst" if bail else None,
                "--junit-xml junit.xml" if junit else None,
                "-vvl --full-trace" if verbose else "-q",
                "-rf",
                f"-k {grep}" if grep else None,
                files,
            ),
            echo=True,
            pty=True,
        )


@invoke.task(iterable=["files"])
def flake8(ctx, files=None):
    files = f"{DEFAULT_TARGETS} setup.py" if not files else " ".join(files)
    ctx.run(_join("flake8", files), echo=True)


@invoke.task(aliases=["typecheck"], iterable=["files"])
def mypy(ctx, files=None):
    files = PACKAGE if not files else " ".join(files)
    ctx.run(_join("mypy", files), echo=True)


@invoke.task(aliases=["format"], iterable=["files"])
def fmt(ctx, files=None):
    """
    Run formatters.
    """
    targets = (
        f"{DEFAULT_TARGETS} setup.py tasks.py" if not files else " ".join(files)
    )
    with ctx.cd(ROOT):
        ctx.run(_join("isort", targets), echo=True)
        ctx.run(_join("black", targets), echo=True)


@invoke.task(pre=[flake8, mypy, test])
def check(ctx):
    """
    Run all checks (lint, typecheck and tests).
    """


@invoke.task
def build(ctx):
    """
    Build source distribution and wheel.
    """
    with ctx.cd(ROOT):
        ctx.run("rm -rf dist", echo=True)
        ctx.run("python setup.py sdist bdist_wheel", echo=True)
