# python -m pytest -v -s tests/test_all_examples.py

import os, sys, glob, subprocess, pathlib, pytest

REPO = pathlib.Path(__file__).resolve().parents[1]
EXAMPLES = sorted(
    p for p in glob.glob(str(REPO / "examples" / "**" / "*.py"), recursive=True)
    if not os.path.basename(p).startswith("_")
)

@pytest.mark.parametrize("example", EXAMPLES, ids=lambda p: os.path.relpath(p, REPO))
def test_example_runs(example):
    """Run each example headlessly (no GUI)."""
    print(f"\nRunning example: {example}", flush=True)

    env = os.environ.copy()
    env["MPLBACKEND"] = "Agg"  # disable GUI
    env["JAXUMAT_TEST"] = "1"  # let examples shorten their load histories
    env["PYTHONPATH"] = str(REPO) + os.pathsep + env.get("PYTHONPATH", "")

    result = subprocess.run(
        [sys.executable, example],
        cwd=REPO,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )

    assert result.returncode == 0, (
        f"\nExample failed: {example}\n"
        f"----- OUTPUT -----\n{result.stdout}"
    )
